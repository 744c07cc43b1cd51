"""
User Directory for the Room Reservation Engine
Handles persistent storage and lookup of user profiles
"""
from tracking import t

import json
import logging
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from infrastructure.constants import UNKNOWN_USER_NAME
from reservations.models import UserRecord


class UserRole(Enum):
    """Roles known to the directory"""
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class UserManager:
    """
    Manages user profiles with persistent JSON storage

    The reservation engine only reads from the directory to validate member
    participants and to enrich room timelines with the owner's name and email.
    Account creation and credentials are handled elsewhere; ``save_user`` is
    kept for administrative seeding.
    """

    def __init__(self, file_path: str = 'data/users.json') -> None:
        """
        Initialize the UserManager with persistent storage

        Args:
            file_path: Path to the JSON file holding user profiles
        """
        t('users.manager.UserManager.__init__')
        self.file_path = Path(file_path)
        self.logger = logging.getLogger('UserManager')
        self._lock = threading.RLock()
        self.users: Dict[int, Dict[str, Any]] = self._load_users()

        self.logger.info(f"UserManager initialized with {len(self.users)} users from {file_path}")

    def get_user(self, user_id: Any) -> Optional[UserRecord]:
        """
        Retrieve a single user by ID

        Returns:
            UserRecord if the user exists, None otherwise
        """
        t('users.manager.UserManager.get_user')
        profile = self.get_profile(user_id)
        if profile is None:
            return None
        return UserRecord.from_dict({**profile, 'id': profile['user_id']})

    def get_profile(self, user_id: Any) -> Optional[Dict[str, Any]]:
        t('users.manager.UserManager.get_profile')
        try:
            key = int(user_id)
        except (TypeError, ValueError):
            return None
        with self._lock:
            profile = self.users.get(key)
        if profile:
            self.logger.debug(f"Retrieved user profile for user_id: {key}")
            return dict(profile)
        self.logger.debug(f"No profile found for user_id: {key}")
        return None

    def exists(self, user_id: Any) -> bool:
        t('users.manager.UserManager.exists')
        return self.get_profile(user_id) is not None

    def display_name(self, user_id: Any) -> str:
        t('users.manager.UserManager.display_name')
        user = self.get_user(user_id)
        return user.name if user and user.name else UNKNOWN_USER_NAME

    def email(self, user_id: Any) -> str:
        t('users.manager.UserManager.email')
        user = self.get_user(user_id)
        return user.email if user else ""

    def is_admin(self, user_id: Any) -> bool:
        t('users.manager.UserManager.is_admin')
        user = self.get_user(user_id)
        return bool(user) and user.role == UserRole.ADMIN.value

    def save_user(self, user_profile: Dict[str, Any]) -> None:
        """
        Save or update a user profile

        Args:
            user_profile: Dictionary containing user profile data,
                          must include a 'user_id' (or 'id') key

        Raises:
            ValueError: If the profile lacks a user id
        """
        t('users.manager.UserManager.save_user')
        profile = dict(user_profile)
        if 'user_id' not in profile and 'id' in profile:
            profile['user_id'] = profile.pop('id')
        if 'user_id' not in profile:
            raise ValueError("User profile must contain 'user_id' key")

        user_id = int(profile['user_id'])
        profile['user_id'] = user_id
        profile.pop('password', None)
        profile.setdefault('role', UserRole.STUDENT.value)

        now_iso = datetime.utcnow().isoformat()
        with self._lock:
            existing = self.users.get(user_id, {})
            profile.setdefault('created_at', existing.get('created_at', now_iso))
            profile['updated_at'] = now_iso
            self.users[user_id] = profile
            self._save_users()

        self.logger.info(f"Saved user profile for user_id: {user_id}")

    def get_all_users(self) -> List[UserRecord]:
        t('users.manager.UserManager.get_all_users')
        with self._lock:
            ids = sorted(self.users)
        return [user for user in (self.get_user(user_id) for user_id in ids) if user]

    def _save_users(self) -> None:
        """Write user data to the JSON file, keyed by user id"""
        t('users.manager.UserManager._save_users')
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(self.users, f, indent=2, ensure_ascii=False, default=str)
            self.logger.debug(f"Successfully saved {len(self.users)} user profiles to {self.file_path}")
        except OSError as e:
            self.logger.error(f"Error saving users to {self.file_path}: {e}", exc_info=True)
            raise

    def _load_users(self) -> Dict[int, Dict[str, Any]]:
        """
        Load user data from the JSON file

        Accepts either an object keyed by user id or a list of profiles
        carrying an 'id' field. Returns an empty directory when the file is
        missing or unreadable.
        """
        t('users.manager.UserManager._load_users')
        if not self.file_path.exists() or self.file_path.stat().st_size == 0:
            self.logger.info(f"User file {self.file_path} is missing or empty, starting with empty user database")
            return {}

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in user file {self.file_path}: {e}")
            return {}
        except OSError as e:
            self.logger.error(f"Error loading users from {self.file_path}: {e}", exc_info=True)
            return {}

        if isinstance(data, list):
            items = [(item.get('id', item.get('user_id')), item) for item in data if isinstance(item, dict)]
        elif isinstance(data, dict):
            items = list(data.items())
        else:
            self.logger.warning(f"Unexpected user file layout in {self.file_path}, ignoring it")
            return {}

        users: Dict[int, Dict[str, Any]] = {}
        for key, value in items:
            try:
                user_id = int(key)
            except (TypeError, ValueError):
                self.logger.warning(f"Invalid user_id key in JSON file: {key}, skipping entry")
                continue
            profile = dict(value)
            profile.pop('id', None)
            profile.pop('password', None)
            profile['user_id'] = user_id
            users[user_id] = profile

        self.logger.info(f"Successfully loaded {len(users)} user profiles from {self.file_path}")
        return users
