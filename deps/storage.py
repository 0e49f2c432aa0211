from typing import Annotated

from fastapi import Depends, Request

from storage.base import Storage


def get_storage(request: Request) -> Storage:
    """
    The store chosen at startup lives on app.state; handlers never pick one themselves.
    """
    return request.app.state.storage


StorageDep = Annotated[Storage, Depends(get_storage)]
