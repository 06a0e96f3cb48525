from typing import cast

from sqlalchemy import text
from sqlalchemy.orm import Session

from tests import random_email, random_store_name


def insert_account(session: Session, email: str = "") -> int:
    email = email or random_email()
    session.execute(
        text(
            "INSERT INTO accounts (name, password, email, address)"
            " VALUES ('kim', 'hashed', :email, 'Seoul')"
        ),
        dict(email=email),
    )
    [[account_id]] = session.execute(
        text("SELECT id FROM accounts WHERE email=:email"), dict(email=email)
    )

    return cast(int, account_id)


def insert_store(session: Session, owner_id: int, name: str = "") -> int:
    name = name or random_store_name()
    session.execute(
        text(
            "INSERT INTO stores (owner_id, name, description)"
            " VALUES (:owner_id, :name, '')"
        ),
        dict(owner_id=owner_id, name=name),
    )
    [[store_id]] = session.execute(
        text("SELECT id FROM stores WHERE name=:name"), dict(name=name)
    )

    return cast(int, store_id)
