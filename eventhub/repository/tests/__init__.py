# -*- coding: utf-8 -*-
"""
Репозитории для работы с пре-квалификационными тестами.

Разделены по функциональности: админские операции над тестами и общие
запросы к тестам и попыткам.
"""

from .admin.crud import (create_test_admin, delete_test_admin,
                         list_active_tests, list_tests_admin,
                         list_tests_starting_between,
                         toggle_test_status_admin, update_test_admin)
from .shared.base import (count_participant_attempts,
                          get_participant_attempts, get_test_attempts,
                          get_test_by_id, get_test_statistics_rows,
                          insert_test_attempt)

__all__ = [
    # Shared
    "get_test_by_id",
    "get_test_attempts",
    "get_participant_attempts",
    "count_participant_attempts",
    "insert_test_attempt",
    "get_test_statistics_rows",
    # Admin
    "create_test_admin",
    "update_test_admin",
    "toggle_test_status_admin",
    "delete_test_admin",
    "list_tests_admin",
    "list_active_tests",
    "list_tests_starting_between",
]
