"""CLI utilities."""

import click
from sqlalchemy.orm import Session

from storefront.api.auth import get_password_hash
from storefront.core.settings_store import SettingsStore
from storefront.database import Base, SessionLocal, engine
from storefront.models.user import AdminUser
from storefront.seed import load_settings_file, seed_settings


@click.group()
def cli():
    """Storefront management CLI."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0")
@click.option("--port", default=5000, type=int)
@click.option("--reload", is_flag=True)
def runserver(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("storefront.api.main:app", host=host, port=port, reload=reload)


@cli.command()
def init_db():
    """Create database tables."""
    from storefront import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    click.echo("Database tables created")


@cli.command()
@click.option("--email", required=True, prompt=True)
@click.option("--name", default="Administrator", prompt=True)
@click.option("--password", required=True, prompt=True, hide_input=True, confirmation_prompt=True)
def create_admin(email: str, name: str, password: str):
    """Create admin user."""
    db: Session = SessionLocal()
    try:
        existing = db.query(AdminUser).filter(AdminUser.email == email).first()
        if existing:
            click.echo(f"Admin {email} already exists")
            return

        user = AdminUser(
            email=email,
            name=name,
            hashed_password=get_password_hash(password),
            is_active=True,
        )
        db.add(user)
        db.commit()
        click.echo(f"Admin {email} created successfully")
    finally:
        db.close()


@cli.command("seed-settings")
@click.argument("yaml_file", type=click.Path(exists=True, dir_okay=False))
def seed_settings_cmd(yaml_file: str):
    """Insert default settings that are not set yet."""
    db: Session = SessionLocal()
    try:
        defaults = load_settings_file(yaml_file)
        inserted = seed_settings(db, defaults)
        click.echo(f"Seeded {inserted} of {len(defaults)} settings")
    finally:
        db.close()


@cli.command()
def show_settings():
    """Print every stored setting."""
    db: Session = SessionLocal()
    try:
        for key, value in sorted(SettingsStore(db).get_all().items()):
            click.echo(f"{key} = {value}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
