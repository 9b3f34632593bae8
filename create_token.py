"""Print a long-lived bearer token for a member login ID.

Usage:
    python create_token.py traveller01
"""

import sys

from trip_planner_api.app.core.security import create_access_token

login_id = sys.argv[1] if len(sys.argv) > 1 else "traveller01"
# 365 days, in seconds
token = create_access_token({"sub": login_id}, expires_delta=365 * 24 * 60 * 60)
print(token)
