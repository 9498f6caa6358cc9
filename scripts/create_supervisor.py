"""Utility script to create a supervisor account from the command line."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import register_user
from app.domain.entities import Role
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a supervisor (coach) account.",
    )
    parser.add_argument("--name", default="Professor", help="Nome completo (padrão: Professor)")
    parser.add_argument(
        "--email",
        default="coach@example.com",
        help="E-mail de acesso (padrão: coach@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Senha. Se omitida será solicitada interativamente.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Senha do professor: ")
    if not password:
        raise SystemExit("Nenhuma senha informada.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role=Role.SUPERVISOR,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Não foi possível criar o professor: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Erro ao gravar o professor no banco: {exc}") from exc
    else:
        print(f"Professor criado:\n  ID: {user.id}\n  Nome: {user.name}\n  Email: {user.email}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
