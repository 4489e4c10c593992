import click
from tourdesk.extensions import db
from tourdesk.models.user import USER_ROLES, User


def register_commands(app):
    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--role", type=click.Choice(USER_ROLES), default="admin", show_default=True)
    def create_admin(email, password, role):
        """Create a back-office user, or reset an existing user's password and role."""
        db.create_all()

        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user is None:
            user = User()
            user.email = email
            db.session.add(user)

        user.set_password(password)
        user.role = role
        user.is_active = True
        db.session.commit()

        click.echo(f"{role} user ready: {email}")
