# controllers/forms.py
"""
Flask-WTF forms for registering and importing attendees.
Also used to validate JSON bodies, which Flask-WTF reads as form data.
"""

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed, FileRequired
from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional, ValidationError


class PersonForm(FlaskForm):
    """Register a single attendee."""

    name = StringField(
        'Nombre completo',
        validators=[
            DataRequired(message='Name is required'),
            Length(max=200, message='Name is too long')
        ],
        render_kw={'placeholder': 'Nombre completo *', 'autofocus': True}
    )

    email = StringField(
        'Email',
        validators=[
            Optional(),
            Length(max=255, message='Email is too long')
        ],
        render_kw={'placeholder': 'Email (opcional)'}
    )

    def validate_name(self, field):
        """Validate that name is not empty after stripping."""
        if not field.data or not field.data.strip():
            raise ValidationError('Name cannot be empty')


class ImportForm(FlaskForm):
    """Upload a spreadsheet of attendees."""

    file = FileField(
        'Archivo',
        validators=[
            FileRequired(message='Select a file to import'),
            FileAllowed(['csv', 'xlsx', 'xls'], message='Only CSV and Excel files are accepted')
        ]
    )
