# =============================================================================
# SMS-Bayes Entry Point for `python -m sms_bayes`
# =============================================================================
# This module allows SMS-Bayes to be run as a Python module:
#
#   python -m sms_bayes train --data spam.csv
#
# This is equivalent to running the 'sms-bayes' command after installation.
# =============================================================================

import sys

from sms_bayes.app import main

if __name__ == "__main__":
    sys.exit(main())
