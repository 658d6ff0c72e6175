from __future__ import annotations

from typing import List, Optional

EXTENSION_NAME = "elobsmanager"


class BsManagerExtension:
    """Holds the plugin configuration set by the build file.

    ``bs_urls`` lists the business solution packages to download and install,
    in the order they are processed. Nothing is validated here; an unset list
    is only rejected when the setup task runs.
    """

    def __init__(self) -> None:
        self.bs_urls: Optional[List[str]] = None

    def get_bs_urls(self) -> Optional[List[str]]:
        return self.bs_urls

    def set_bs_urls(self, bs_urls: Optional[List[str]]) -> None:
        self.bs_urls = bs_urls

    def __repr__(self) -> str:
        return f"BsManagerExtension(bs_urls={self.bs_urls!r})"
