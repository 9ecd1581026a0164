"""
Authentication forms using Flask-WTF.
Accepts JSON bodies as well as form posts.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, ValidationError

from utils.validators import validate_email as is_valid_email


class LoginForm(FlaskForm):
    """Login form with email and password."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    remember_me = BooleanField('Remember me')

    def validate_email(self, field):
        if not is_valid_email(str(field.data).strip()):
            raise ValidationError('Invalid email format')
