"""Roles: storage, the service that creates them and the API endpoint."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Dict, Mapping, Tuple, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from adminkit import errors, schema, utils
from adminkit.database import Database
from adminkit.errors import CustomError
from adminkit.models import Role

log = logging.getLogger(__name__)


class RoleRepository:
    """Reads and writes roles in the database."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def create(self, role: Role) -> Role:
        """Store a new role; raises CustomError if it cannot be stored."""
        try:
            with self._database.session() as db_session:
                db_session.add(role)
        except SQLAlchemyError as exc:
            raise errors.wrap(exc, "RoleRepo.Create") from exc
        return role

    def get_by_name(self, name: str) -> Role:
        """The role with this name; raises CustomError if there is none."""
        try:
            with self._database.session() as db_session:
                role = db_session.execute(
                    select(Role).where(Role.name == name)
                ).scalars().first()
        except SQLAlchemyError as exc:
            raise errors.wrap(exc, "RoleRepo.GetByName") from exc
        if role is None:
            missing = LookupError("record not found")
            raise errors.wrap(missing, "RoleRepo.GetByName") from missing
        return role


class RoleService:
    """Business operations on roles."""

    def __init__(self, repo: RoleRepository) -> None:
        self._repo = repo

    def create_role(self, item: schema.RoleBodyParam) -> Role:
        """Create a role from a request body."""
        role = Role(name=item.name, description=item.description)
        self._repo.create(role)
        return role


class RoleAPI:
    """The role endpoints; each returns an HTTP status and a response body."""

    def __init__(self, service: RoleService) -> None:
        self._service = service

    def create_role(
        self, body: Union[Mapping[str, Any], str, bytes]
    ) -> Tuple[int, Dict[str, Any]]:
        """Create a role from a JSON body."""
        try:
            item = schema.parse_body(schema.RoleBodyParam, body)
        except CustomError as err:
            log.error("Request body is invalid: %s", err)
            return HTTPStatus.BAD_REQUEST, utils.prepare_response(None, str(err), "")

        try:
            role = self._service.create_role(item)
        except CustomError as err:
            log.error("%s", err)
            return HTTPStatus.BAD_REQUEST, utils.prepare_response(None, str(err), "")

        result = schema.Role(id=role.id, name=role.name, description=role.description or "")
        return HTTPStatus.OK, utils.prepare_response(result, "OK", "")