"""
Simple health check for the package.

Also provides version info from the command-line.
"""
import argparse
import platform
import time

from .sim import autosim
from .version import __version__


def hello_world():
    """Simple sim run as a health check."""
    t = time.time()
    res = autosim(crash=0.5)
    elapsed = time.time() - t
    print("Elapsed time:", elapsed)
    print(res[["dsc_supply", "total_collateral_value", "min_health", "liquidation_count"]].tail())
    return res


def _python_info():
    """
    Return formatted string for python implementation and version.

    Returns
    --------
    str:
        Implementation name, version, and platform
    """
    impl = platform.python_implementation()
    version = platform.python_version()
    system = platform.system()
    return f"{impl} {version} on {system}"


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        prog="dscsim",
        description="Simulate a Decentralized StableCoin engine in Python",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}, {_python_info()}",
    )
    args = parser.parse_args()

    # `--version` option automatically exits, so we can
    # just run this.
    res = hello_world()
