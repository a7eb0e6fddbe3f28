"""
Business logic for admin accounts.

Admins sign in with email and password and receive a token whose
``type`` claim is ``"admin"``; that claim is what opens the
admin-gated routes.
"""

import logging
from typing import Any, Dict

from pymongo.errors import DuplicateKeyError

from salon_booking_api.app.core.db import MongoGateway, parse_object_id, utcnow
from salon_booking_api.app.core.exceptions import InvalidCredentials, NotFound, ValidationFailed
from salon_booking_api.app.core.security import (
    ADMIN,
    check_password,
    create_access_token,
    hash_password,
    is_bcrypt_hash,
)
from salon_booking_api.app.schemas.user import AdminRead

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AdminService:
    """Service for admin authentication and account maintenance."""

    @classmethod
    def authenticate(cls, db: MongoGateway, email: str, password: str) -> str:
        """Check admin credentials and return a freshly signed token.

        An unknown email and a wrong password raise the same
        ``InvalidCredentials`` error.
        """
        admin = db.admin_users.find_one({"email": email})
        if not check_password(password, admin.get("password") if admin else None):
            logger.info("Failed admin login for %s", email)
            raise InvalidCredentials()
        if is_bcrypt_hash(admin["password"]):
            db.admin_users.update_one(
                {"_id": admin["_id"]},
                {"$set": {"password": hash_password(password), "updatedAt": utcnow()}},
            )
            logger.info("Replaced bcrypt hash for admin %s", email)
        logger.info("Admin %s logged in", email)
        return create_access_token({"id": str(admin["_id"]), "email": admin["email"], "type": ADMIN})

    @classmethod
    def register(cls, db: MongoGateway, email: str, password: str) -> None:
        if db.admin_users.find_one({"email": email}):
            raise ValidationFailed("Admin already exists")
        now = utcnow()
        try:
            db.admin_users.insert_one(
                {
                    "email": email,
                    "password": hash_password(password),
                    "role": "admin",
                    "createdAt": now,
                    "updatedAt": now,
                }
            )
        except DuplicateKeyError as exc:
            raise ValidationFailed("Admin already exists") from exc
        logger.info("Admin %s created", email)

    @classmethod
    def get_admin(cls, db: MongoGateway, admin_id: Any) -> AdminRead:
        oid = parse_object_id(admin_id)
        admin = db.admin_users.find_one({"_id": oid}) if oid else None
        if not admin:
            raise NotFound("Admin not found")
        return AdminRead.model_validate(admin)

    @classmethod
    def change_password(
        cls, db: MongoGateway, claims: Dict[str, Any], current_password: str, new_password: str
    ) -> None:
        """Replace the signed-in admin's password after checking the current one."""
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed("New password must be at least 6 characters")
        oid = parse_object_id(claims.get("id"))
        admin = db.admin_users.find_one({"_id": oid}) if oid else None
        if not admin:
            raise NotFound("Admin user not found")
        if not check_password(current_password, admin.get("password")):
            raise ValidationFailed("Current password is incorrect")
        db.admin_users.update_one(
            {"_id": oid},
            {"$set": {"password": hash_password(new_password), "updatedAt": utcnow()}},
        )
        logger.info("Admin %s changed password", admin["email"])
