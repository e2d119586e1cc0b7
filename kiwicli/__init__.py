"""kiwicli - sign and publish endorsements to a Kiwi News aggregation node.

Links are submitted or upvoted as EIP-712 typed messages, signed either with an
encrypted local keystore or a Ledger hardware wallet.
"""

__version__ = "0.1.0"
__author__ = "kiwicli Contributors"

from kiwicli.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
