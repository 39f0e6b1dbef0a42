ROLE_STANDARD = "users"
ROLE_ADMIN = "admin"
ROLE_ELEVATED = "VIP"

ROLES = (ROLE_STANDARD, ROLE_ADMIN, ROLE_ELEVATED)
