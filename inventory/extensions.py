"""
Flask extension instances, bound to the app in ``create_app()``.

There is no local database: the signed-in user lives in the Flask
session and every record lives behind the inventory API.
"""

from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

# Session login.  Anonymous requests to protected pages go to the
# login form with a Portuguese prompt.
login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Faça login para acessar esta página."
login_manager.login_message_category = "warning"

# Every POST form (equipment form, delete, login) carries csrf_token().
csrf = CSRFProtect()
