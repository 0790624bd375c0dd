# controller/auth_controller.py
from fastapi import APIRouter, Depends
from controller.controller_dependencies import get_token_service, rate_limit_dependencies
from model.aps import Token
from service.token_service import TokenService
from util.constants import InternalURIs

auth_router = APIRouter(dependencies=rate_limit_dependencies())


@auth_router.get(InternalURIs.AUTH_TOKEN, response_model=Token)
async def viewer_token(
    service: TokenService = Depends(get_token_service),
) -> Token:
    # Public token: viewables:read only, safe to hand to the browser viewer.
    return await service.get_viewer_token()
