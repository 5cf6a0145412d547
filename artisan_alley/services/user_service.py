from typing import List, Optional
from sqlalchemy.orm import Session
from artisan_alley.db.models import User
from artisan_alley.security.passwords import hash_password, verify_password
import logging

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    """Raised when registering an email that already has an account."""


class UserService:
    """Service for handling user-related operations in the database."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> Optional[User]:
        """Find a user by their internal ID.

        Returns:
            The User object if found, None otherwise.
        """
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except Exception as e:
            logger.error(f"Error finding user {user_id}: {e}")
            raise

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def list_users(self, role: Optional[str] = None) -> List[User]:
        query = self.db.query(User)
        if role:
            query = query.filter(User.role == role)
        return query.all()

    def list_unverified_artists(self) -> List[User]:
        return self.db.query(User).filter(
            User.role == "artist",
            User.verified_status.is_(False)
        ).all()

    def create_user(self, name: str, email: str, password: str, role: str = "customer") -> User:
        """Register a new account with a hashed password.

        Raises:
            UserExistsError: If the email is already registered.
        """
        email = email.strip().lower()
        if self.find_user_by_email(email):
            raise UserExistsError(f"User already exists: {email}")

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            verified_status=False,
            email_verified=False,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating user {email}: {str(e)}")
            raise
        logger.info(f"Created {role} account {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the active user matching the credentials, or None."""
        user = self.find_user_by_email(email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def set_artist_verified(self, artist_id: str, approved: bool) -> Optional[User]:
        """Approve or reject an artist account.

        Args:
            artist_id: The unique ID of the artist.
            approved: New value for the artist's verified status.

        Returns:
            The updated User object, or None when no artist has that ID.
        """
        try:
            artist = self.db.query(User).filter(User.id == artist_id, User.role == "artist").first()
            if not artist:
                return None
            artist.verified_status = approved
            self.db.commit()
            self.db.refresh(artist)
            logger.info(f"Artist {artist_id} verified_status set to {approved}")
            return artist
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating artist {artist_id}: {str(e)}")
            raise
