"""FastAPI dependencies resolving the calling ledger address.

Usage in any protected router:
    from src.dl_gateway.auth.dependencies import get_current_caller

    @router.post("/mint")
    async def mint(caller: str = Depends(get_current_caller)):
        ...

Authorization of privileged operations (distribute, fund pool) is decided
by the engine's AccessGate, not here.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.dl_common.errors import InvalidCredentialsError
from src.dl_gateway.auth.jwt_handler import decode_token
from src.dl_ledger.domain.constants import LEDGER_ADDRESS

# Tokens are issued out of band (scripts/issue_token.py); tokenUrl only feeds Swagger UI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_caller(token: str = Depends(oauth2_scheme)) -> str:
    """Return the address in the Bearer token's `sub` claim.

    Raises HTTP 401 if the token is missing, invalid, or expired, or if it
    names the ledger's own holding address.
    """
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    address = payload.get("sub")
    if not address or address == LEDGER_ADDRESS:
        raise _CREDENTIALS_EXCEPTION
    return address
