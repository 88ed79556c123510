"""User Object module."""

from typing import AnyStr, Dict


class UserObject:
    """An API user. ``password_hash`` is a bcrypt hash, never a plaintext password."""

    _id = None
    username: AnyStr = None
    password_hash: AnyStr = None

    def __init__(self, _id=None, username=None, password_hash=None):
        self._id = _id
        self.username = username
        self.password_hash = password_hash

    @staticmethod
    def from_dict(dict_obj: Dict) -> "UserObject":
        """Build a UserObject from a stored document."""
        return UserObject(
            _id=dict_obj.get("_id"),
            username=dict_obj.get("username"),
            password_hash=dict_obj.get("password_hash"),
        )

    def to_dict(self):
        """Convert to a storable document, omitting an unset ``_id``."""
        result_dict = {"username": self.username, "password_hash": self.password_hash}
        if self._id is not None:
            result_dict["_id"] = self._id
        return result_dict

    def principal(self) -> Dict:
        """Public identity claims for tokens and request state."""
        return {"id": str(self._id), "username": self.username}

    def __repr__(self):
        """String representation without the password hash."""
        return f"UserObject(_id={repr(self._id)}, username={repr(self.username)})"
