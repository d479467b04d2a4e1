# apps/tasks/forms.py

from django import forms

from apps.core.forms import ApiForm, PositionField
from apps.core.models import Task


class PositiveFloatField(forms.FloatField):
    default_error_messages = {
        'not_positive': 'Ensure this value is greater than 0.',
    }

    def validate(self, value):
        super().validate(value)
        if value is not None and value <= 0:
            raise forms.ValidationError(self.error_messages['not_positive'], code='not_positive')


class TaskCreateForm(ApiForm):
    board_id = forms.UUIDField()
    lane_id = forms.UUIDField()
    title = forms.CharField(min_length=1, max_length=200)
    description = forms.CharField(max_length=5000, required=False)
    priority = forms.ChoiceField(choices=Task.PRIORITY_CHOICES, required=False)
    due_date = forms.DateTimeField(required=False)
    estimated_hours = PositiveFloatField(required=False)
    position = PositionField()

    defaults = {'priority': 'MEDIUM'}


class TaskUpdateForm(ApiForm):
    title = forms.CharField(min_length=1, max_length=200, required=False)
    description = forms.CharField(max_length=5000, required=False)
    priority = forms.ChoiceField(choices=Task.PRIORITY_CHOICES, required=False)
    due_date = forms.DateTimeField(required=False)
    estimated_hours = PositiveFloatField(required=False)
    position = PositionField()


class TaskFilterForm(ApiForm):
    """Query string of GET /tasks"""
    board_id = forms.UUIDField(required=False)
    lane_id = forms.UUIDField(required=False)


class TaskMoveForm(ApiForm):
    lane_id = forms.UUIDField()
    position = PositionField(required=True)


class AssignUserForm(ApiForm):
    user_id = forms.UUIDField()


class AddLabelForm(ApiForm):
    label_id = forms.UUIDField()


class CommentForm(ApiForm):
    content = forms.CharField(min_length=1, max_length=5000)


class AttachmentForm(ApiForm):
    file_name = forms.CharField(min_length=1, max_length=255)
    file_url = forms.URLField(max_length=500)
    file_size = forms.IntegerField(min_value=1)


class SubtaskCreateForm(ApiForm):
    title = forms.CharField(min_length=1, max_length=200)
    position = PositionField()


class SubtaskUpdateForm(ApiForm):
    title = forms.CharField(min_length=1, max_length=200, required=False)
    is_completed = forms.NullBooleanField(required=False)
    position = PositionField()
