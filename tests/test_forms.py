"""Tests for JSON body validation."""

import uuid

import pytest

from apps.board.forms import BoardCreateForm, LaneReorderForm, LaneUpdateForm
from apps.core.exceptions import ValidationError
from apps.core.forms import LabelForm, camel_to_snake, snake_to_camel
from apps.tasks.forms import TaskMoveForm


class TestKeyConversion:

    def test_camel_to_snake(self):
        assert camel_to_snake('wipLimit') == 'wip_limit'
        assert camel_to_snake('createDefaultLanes') == 'create_default_lanes'

    def test_snake_to_camel(self):
        assert snake_to_camel('estimated_hours') == 'estimatedHours'


class TestApiForm:
    """Presence tracking, defaults and error reporting."""

    def test_absent_and_null_are_distinct(self):
        assert LaneUpdateForm({'name': 'QA'}).validated() == {'name': 'QA'}
        assert LaneUpdateForm({'wipLimit': None}).validated() == {'wip_limit': None}

    def test_unknown_keys_ignored(self):
        assert LaneUpdateForm({'name': 'QA', 'color': 'red'}).validated() == {'name': 'QA'}

    def test_default_applied(self):
        workspace_id = uuid.uuid4()
        data = BoardCreateForm({'workspaceId': str(workspace_id), 'name': 'Board'}).validated()
        assert data['create_default_lanes'] is True
        assert data['workspace_id'] == workspace_id

    def test_explicit_false_kept(self):
        data = BoardCreateForm({
            'workspaceId': str(uuid.uuid4()), 'name': 'Board', 'createDefaultLanes': False,
        }).validated()
        assert data['create_default_lanes'] is False

    def test_errors_use_camel_case(self):
        with pytest.raises(ValidationError) as excinfo:
            TaskMoveForm({'laneId': 'nope'}).validated()

        assert set(excinfo.value.errors) == {'laneId', 'position'}
        assert excinfo.value.message.startswith('laneId:')

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError):
            TaskMoveForm(['not', 'a', 'dict'])

    def test_label_color_format(self):
        with pytest.raises(ValidationError):
            LabelForm({'name': 'bug', 'color': 'red'}).validated()


class TestLaneReorderForm:

    def test_pairs(self):
        lane_id = uuid.uuid4()
        data = LaneReorderForm({'lanes': [{'id': str(lane_id), 'position': 2}]}).validated()
        assert data['lanes'] == [(lane_id, 2)]

    def test_empty_list_allowed(self):
        assert LaneReorderForm({'lanes': []}).validated() == {'lanes': []}

    def test_missing_key(self):
        with pytest.raises(ValidationError):
            LaneReorderForm({}).validated()

    @pytest.mark.parametrize('entry', [
        {'id': 'not-a-uuid', 'position': 0},
        {'id': str(uuid.uuid4()), 'position': -1},
        {'id': str(uuid.uuid4()), 'position': '1'},
        {'id': str(uuid.uuid4()), 'position': True},
    ])
    def test_bad_entries(self, entry):
        with pytest.raises(ValidationError):
            LaneReorderForm({'lanes': [entry]}).validated()
