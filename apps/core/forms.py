# apps/core/forms.py

"""
Validation of JSON request bodies

Bodies arrive with camelCase keys; forms declare snake_case fields.
`ApiForm.validated()` returns only the keys the client actually sent, so
partial updates can tell an absent field from an explicit null.
"""

import re

from django import forms

from .exceptions import ValidationError
from .models import Label, WorkspaceMember


_CAMEL_RE = re.compile(r'(?<!^)(?=[A-Z])')


def camel_to_snake(name: str) -> str:
    return _CAMEL_RE.sub('_', name).lower()


def snake_to_camel(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part.title() for part in tail)


class ApiForm(forms.Form):
    """Base for every JSON body form"""

    # Fields filled in when the client omits them
    defaults = {}

    def __init__(self, payload=None):
        if payload is not None and not isinstance(payload, dict):
            raise ValidationError('Request body must be a JSON object')

        self.present = set()
        data = {}
        for key, value in (payload or {}).items():
            name = camel_to_snake(key)
            if name in self.base_fields:
                data[name] = value
                self.present.add(name)

        super().__init__(data=data)

    def validated(self) -> dict:
        """Cleaned values of the fields present in the payload plus defaults"""
        if not self.is_valid():
            errors = {
                snake_to_camel(field): [str(msg) for msg in messages]
                for field, messages in self.errors.items()
            }
            message = '; '.join(
                f"{field}: {' '.join(messages)}" for field, messages in errors.items()
            )
            raise ValidationError(message, errors=errors)

        result = {name: self.cleaned_data[name] for name in self.present}
        for name, value in self.defaults.items():
            if result.get(name) in (None, ''):
                result[name] = value
        return result


class PositionField(forms.IntegerField):
    """Non-negative ordering key"""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('min_value', 0)
        super().__init__(**kwargs)


# === AUTH ===

class RegisterForm(ApiForm):
    email = forms.EmailField()
    password = forms.CharField(min_length=8, strip=False)
    name = forms.CharField(min_length=2, max_length=100)


class LoginForm(ApiForm):
    email = forms.EmailField()
    password = forms.CharField(strip=False)


class RefreshTokenForm(ApiForm):
    refresh_token = forms.CharField()


class UpdateProfileForm(ApiForm):
    name = forms.CharField(min_length=2, max_length=100, required=False)
    avatar_url = forms.URLField(required=False)


class ChangePasswordForm(ApiForm):
    current_password = forms.CharField(strip=False)
    new_password = forms.CharField(min_length=8, strip=False)


# === WORKSPACES ===

class WorkspaceCreateForm(ApiForm):
    name = forms.CharField(min_length=2, max_length=100)
    description = forms.CharField(max_length=500, required=False)


class WorkspaceUpdateForm(ApiForm):
    name = forms.CharField(min_length=2, max_length=100, required=False)
    description = forms.CharField(max_length=500, required=False)


class WorkspaceMemberForm(ApiForm):
    user_id = forms.UUIDField()
    role = forms.ChoiceField(choices=WorkspaceMember.ROLE_CHOICES, required=False)

    defaults = {'role': 'MEMBER'}


class WorkspaceRoleForm(ApiForm):
    role = forms.ChoiceField(choices=WorkspaceMember.ROLE_CHOICES)


class LabelForm(ApiForm):
    name = forms.CharField(min_length=1, max_length=50)
    color = forms.RegexField(regex=r'^#[0-9A-Fa-f]{6}$', required=False)

    def clean_color(self):
        return self.cleaned_data['color'] or Label._meta.get_field('color').default
