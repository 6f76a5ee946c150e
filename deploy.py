"""
SAVI Token Deployment Wrapper
Runs scripts/deploy_savi_token.py
"""

import subprocess
import sys
from loguru import logger


def main() -> int:
    logger.info("=" * 70)
    logger.info("SAVI Token Deployment")
    logger.info("=" * 70)

    # Run deployment script
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_savi_token"],
        cwd="."
    )

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
