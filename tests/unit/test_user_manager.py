"""Unit tests for the JSON-backed user directory."""
from tracking import t

import json

import pytest

from users.manager import UserManager, UserRole


def _create_manager(tmp_path):
    t('tests.unit.test_user_manager._create_manager')
    return UserManager(str(tmp_path / 'users.json'))


def test_save_and_get_user(tmp_path):
    t('tests.unit.test_user_manager.test_save_and_get_user')
    manager = _create_manager(tmp_path)
    manager.save_user({'user_id': 7, 'name': 'Grace', 'email': 'grace@example.com', 'password': 'hunter2'})

    user = manager.get_user(7)

    assert user.id == 7
    assert user.name == 'Grace'
    assert user.role == UserRole.STUDENT.value
    assert manager.get_user('7') == user
    assert manager.exists(7)
    assert 'password' not in manager.get_profile(7)

    reloaded = _create_manager(tmp_path)
    assert reloaded.get_user(7) == user


def test_missing_user(tmp_path):
    t('tests.unit.test_user_manager.test_missing_user')
    manager = _create_manager(tmp_path)

    assert manager.get_user(1) is None
    assert manager.get_user('abc') is None
    assert manager.display_name(1) == 'Unknown'
    assert manager.email(1) == ''
    assert not manager.is_admin(1)


def test_loads_list_layout_with_ids(tmp_path):
    t('tests.unit.test_user_manager.test_loads_list_layout_with_ids')
    path = tmp_path / 'users.json'
    path.write_text(json.dumps([
        {'id': 1, 'name': 'Admin', 'email': 'admin@example.com', 'role': 'admin', 'password': 'x'},
        {'id': 'oops', 'name': 'Broken'},
        {'id': 2, 'name': 'Student'},
    ]), encoding='utf-8')

    manager = UserManager(str(path))

    assert [user.id for user in manager.get_all_users()] == [1, 2]
    assert manager.is_admin(1)
    assert manager.display_name(2) == 'Student'


def test_save_requires_identifier(tmp_path):
    t('tests.unit.test_user_manager.test_save_requires_identifier')
    manager = _create_manager(tmp_path)

    with pytest.raises(ValueError):
        manager.save_user({'name': 'Nobody'})


def test_invalid_json_starts_empty(tmp_path):
    t('tests.unit.test_user_manager.test_invalid_json_starts_empty')
    path = tmp_path / 'users.json'
    path.write_text('{broken', encoding='utf-8')

    assert UserManager(str(path)).get_all_users() == []
