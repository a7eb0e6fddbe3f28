"""Print a long-lived admin token, e.g. for operator scripts using ``SalonAPI``.

Usage:
    python create_token.py <admin id> <admin email> [days]
"""

import sys

from salon_booking_api.app.core.security import ADMIN, create_access_token

if len(sys.argv) < 3:
    sys.exit(__doc__)

admin_id, email = sys.argv[1], sys.argv[2]
days = int(sys.argv[3]) if len(sys.argv) > 3 else 365
print(create_access_token({"id": admin_id, "email": email, "type": ADMIN}, expires_delta=days * 24 * 60 * 60))
