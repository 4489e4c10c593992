from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import auth
from . import tours
from . import rpc
from . import storage
from . import categories
from . import inquiries
from . import site_content
from . import admin
from . import users
from . import audit
