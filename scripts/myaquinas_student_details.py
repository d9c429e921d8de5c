#!/usr/bin/env python
from __future__ import annotations

import asyncio
import sys
from getpass import getpass

from logprise import logger

from myaquinas import (
    GET_STUDENT_DETAILS,
    GET_TIMETABLE_DATA,
    MyAquinas,
    MyAquinasBadCredentialsError,
    MyAquinasException,
    MyAquinasUnauthorizedError,
    PathConfig,
)
from myaquinas.common import xml_to_dict


async def login(admission_number: str, config: PathConfig) -> MyAquinas:
    password = getpass(f"Password for {admission_number}: ")
    session = MyAquinas.restore(admission_number, password, config)
    if not session.authenticated:
        await session.authenticate()
        session.save_token()
    return session


async def main(admission_number: str) -> int:
    config = PathConfig()
    session = await login(admission_number, config)

    for endpoint in (GET_STUDENT_DETAILS, GET_TIMETABLE_DATA):
        try:
            root = await session.fetch(endpoint)
        except MyAquinasUnauthorizedError:
            logger.warning("The saved session has expired, run this script again to log in")
            session.forget_token()
            return 1

        logger.info(f"{endpoint}: {xml_to_dict(root)}")

    return 0


if __name__ == "__main__":
    number = sys.argv[1] if len(sys.argv) > 1 else input("Admission number: ").strip()
    try:
        sys.exit(asyncio.run(main(number)))
    except MyAquinasBadCredentialsError:
        logger.error("Login failed")
        sys.exit(1)
    except MyAquinasException as ex:
        logger.error(f"Unexpected error ({ex.kind.name}): {ex}")
        sys.exit(1)
