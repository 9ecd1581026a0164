"""
Authentication routes: login, logout, current user.
Session-cookie authentication via Flask-Login.
"""

from flask import Blueprint
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm
from utils.forms import json_formdata, first_form_error
from models.user import User, get_user_by_email, check_password
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Log in with email and password.

    Request body:
        email, password, remember_me (optional)

    Returns:
        JSON with the logged-in user
    """
    form = LoginForm(formdata=json_formdata())

    if not form.validate_on_submit():
        return api_error(first_form_error(form), status=400)

    user_dict = get_user_by_email(form.email.data)

    # Check credentials
    if user_dict is None or not check_password(user_dict, form.password.data):
        return api_error(MESSAGES['invalid_credentials'], status=401)

    # Check if user is active
    if not user_dict.get('active'):
        return api_error(MESSAGES['account_disabled'], status=403)

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)

    return api_success(
        data=user.to_dict(),
        message=MESSAGES['login_success'].format(name=user.full_name or user.email)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me')
@login_required
def me():
    """Current user profile."""
    return api_success(data=current_user.to_dict())


@auth_bp.route('/csrf-token')
def csrf_token():
    """CSRF token for the frontend to echo back in X-CSRFToken."""
    return api_success(data={'csrfToken': generate_csrf()})
