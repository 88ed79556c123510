"""User credential service."""

from potions.auth.passwords import hash_password, verify_password
from potions.commons.daos.docdb_dao.docdb_dao_base import DocumentDBDAO
from potions.commons.exceptions import AuthenticationError, StoreError
from potions.commons.potions_dataclasses.user_object import UserObject
from potions.commons.potions_logger import PotionsLogger


class UserService:
    """Create users and check their credentials. Plaintext passwords are never stored."""

    def __init__(self, dao: DocumentDBDAO = None):
        self.logger = PotionsLogger()
        self._dao_instance = dao

    def _dao(self) -> DocumentDBDAO:
        if self._dao_instance is None:
            self._dao_instance = DocumentDBDAO.get_instance()
        return self._dao_instance

    def create_user(self, username: str, password: str) -> UserObject:
        """Store a new user with a bcrypt-hashed password.

        Raises
        ------
        ConflictError
            If ``username`` is taken.
        """
        user = UserObject(username=username, password_hash=hash_password(password))
        try:
            user._id = self._dao().insert_user(user.to_dict())
        except StoreError as e:
            self.logger.exception(e)
            raise e
        self.logger.info(f"Created user {username}")
        return user

    def verify(self, username: str, password: str) -> UserObject:
        """Return the user matching these credentials.

        Raises
        ------
        AuthenticationError
            On an unknown username or a wrong password, without saying which.
        """
        try:
            doc = self._dao().get_user(username)
        except StoreError as e:
            self.logger.exception(e)
            raise e
        if doc is None or not verify_password(password, doc.get("password_hash")):
            self.logger.warning(f"Failed login attempt for {username!r}")
            raise AuthenticationError("Invalid credentials.")
        return UserObject.from_dict(doc)
