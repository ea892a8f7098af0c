"""
Remove expired admin tokens from the token document.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from helpcenter.dependencies import get_auth_service, get_identity_provider, get_token_store

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    auth = get_auth_service(tokens=get_token_store(), identity=get_identity_provider())
    removed = auth.purge_expired()
    logger.info("Removed %d expired tokens", removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
