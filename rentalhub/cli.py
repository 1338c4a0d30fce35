# rentalhub/cli.py
import click
from flask import current_app
from flask.cli import with_appcontext

from rentalhub.extensions import db
from rentalhub.models import Admin
from rentalhub.utils.validation import validate_email, validate_password


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create all tables."""
    db.create_all()
    click.echo("Database tables created.")


@click.command("create-super-admin")
@with_appcontext
@click.option("--email", prompt=True)
@click.option("--name", default=None)
@click.password_option()
def create_super_admin_command(email, name, password):
    """Seed a super admin; super admins add the other admins."""
    email = Admin.normalize_email(email)
    if not validate_email(email):
        raise click.BadParameter("invalid email address", param_hint="--email")
    ok, message = validate_password(password)
    if not ok:
        raise click.BadParameter(message, param_hint="--password")

    existing = Admin.find_by_email(email)
    if existing:
        click.echo(f"Admin already exists: {email} ({existing.role})")
        return

    admin = Admin(email=email, name=name, role="super_admin")
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    current_app.logger.info("Seeded super admin id=%s", admin.id)
    click.echo(f"Super admin created: {email}")


def register_cli(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_super_admin_command)
