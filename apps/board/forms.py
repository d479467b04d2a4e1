# apps/board/forms.py

import uuid

from django import forms
from django.core.exceptions import ValidationError as FieldError

from apps.core.forms import ApiForm, PositionField
from apps.core.models import BoardMember


class BoardCreateForm(ApiForm):
    workspace_id = forms.UUIDField()
    name = forms.CharField(min_length=2, max_length=100)
    description = forms.CharField(max_length=500, required=False)
    create_default_lanes = forms.NullBooleanField(required=False)

    defaults = {'create_default_lanes': True}


class BoardUpdateForm(ApiForm):
    name = forms.CharField(min_length=2, max_length=100, required=False)
    description = forms.CharField(max_length=500, required=False)


class BoardMemberForm(ApiForm):
    user_id = forms.UUIDField()
    role = forms.ChoiceField(choices=BoardMember.ROLE_CHOICES, required=False)

    defaults = {'role': 'MEMBER'}


class BoardFilterForm(ApiForm):
    """Query string of GET /boards"""
    workspace_id = forms.UUIDField(required=False)


class LaneCreateForm(ApiForm):
    name = forms.CharField(min_length=1, max_length=50)
    position = PositionField()
    wip_limit = forms.IntegerField(min_value=1, required=False)


class LaneUpdateForm(ApiForm):
    """`wipLimit: null` clears the limit; an absent key leaves it alone"""
    name = forms.CharField(min_length=1, max_length=50, required=False)
    position = PositionField()
    wip_limit = forms.IntegerField(min_value=1, required=False)


class LaneOrderField(forms.Field):
    """
    List of {id, position} pairs

    An empty list is valid; a missing key is not.
    """

    default_error_messages = {
        'invalid': 'Expected a list of {id, position} objects',
        'invalid_id': 'Invalid lane id at index %(index)s',
        'invalid_position': 'Position at index %(index)s must be an integer >= 0',
    }

    def to_python(self, value):
        if value is None:
            return None
        if not isinstance(value, list):
            raise FieldError(self.error_messages['invalid'], code='invalid')

        result = []
        for index, item in enumerate(value):
            if not isinstance(item, dict):
                raise FieldError(self.error_messages['invalid'], code='invalid')

            try:
                lane_id = uuid.UUID(str(item.get('id')))
            except ValueError:
                raise FieldError(self.error_messages['invalid_id'], code='invalid_id',
                                 params={'index': index})

            position = item.get('position')
            if isinstance(position, bool) or not isinstance(position, int) or position < 0:
                raise FieldError(self.error_messages['invalid_position'],
                                 code='invalid_position', params={'index': index})

            result.append((lane_id, position))
        return result

    def validate(self, value):
        if value is None:
            raise FieldError(self.error_messages['required'], code='required')


class LaneReorderForm(ApiForm):
    lanes = LaneOrderField()
