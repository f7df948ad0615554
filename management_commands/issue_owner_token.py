#!/usr/bin/env python3

from datetime import timedelta

import click


def extract_name_from_email(email: str) -> str:
    local_part = email.split('@')[0]
    for separator in ('.', '_'):
        if separator in local_part:
            return ' '.join(part.capitalize() for part in local_part.split(separator) if part)
    return local_part.capitalize()


def get_or_create_owner(db, email: str, name: str = None):
    from models.taskflow import User

    owner = db.query(User).filter(User.email == email).first()
    if owner:
        return owner, False

    owner = User(email=email, name=name or extract_name_from_email(email))
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner, True


@click.command()
@click.argument('email')
@click.option('--name', default=None, help='Display name, derived from the email when omitted')
@click.option('--expires-minutes', default=60 * 24, show_default=True, type=int)
def issue_owner_token(email, name, expires_minutes):
    """Create the owner EMAIL if needed and print a bearer token for it."""
    from settings.database import get_db
    from services.auth import create_jwt_token

    db = next(get_db())
    try:
        owner, created = get_or_create_owner(db, email.strip(), name)
        click.echo(f"{'Created' if created else 'Found'} owner {owner.email} (ID: {owner.id})")

        token = create_jwt_token(
            {"user_id": owner.id, "email": owner.email},
            expires_delta=timedelta(minutes=expires_minutes)
        )
        click.echo(token)
    finally:
        db.close()


if __name__ == '__main__':
    issue_owner_token()
