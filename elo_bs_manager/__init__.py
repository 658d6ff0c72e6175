"""ELO Business Solution manager (build plugin).

Downloads business solution packages (.eloinst) listed in the build
configuration and deploys them to an ELO server through the vendor
script engine.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
