"""Tests for the seed management command."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from apps.core.models import Lane, Task, Workspace


@pytest.mark.django_db
class TestSeedCommand:
    """Tests for manage.py seed."""

    def test_loads_demo_board(self):
        call_command('seed', stdout=StringIO())

        assert Workspace.objects.count() == 1
        assert Lane.objects.count() == 4
        assert Task.objects.count() == 7

    def test_priorities_are_valid_choices(self):
        call_command('seed', stdout=StringIO())

        allowed = {value for value, _ in Task.PRIORITY_CHOICES}
        assert set(Task.objects.values_list('priority', flat=True)) <= allowed

    def test_refuses_second_run(self):
        call_command('seed', stdout=StringIO())

        with pytest.raises(CommandError):
            call_command('seed', stdout=StringIO())
