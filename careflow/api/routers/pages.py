from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from careflow.api.deps import get_current_account, get_page_renderer, require_account_page, require_anonymous
from careflow.application.ports.page_renderer_port import PageRendererPort
from careflow.domain.entities.account import Account


router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def index(
    account: Account | None = Depends(get_current_account),
    renderer: PageRendererPort = Depends(get_page_renderer),
):
    return HTMLResponse(renderer.render(page="index", account=account))


@router.get("/services", response_class=HTMLResponse)
def services(
    account: Account | None = Depends(get_current_account),
    renderer: PageRendererPort = Depends(get_page_renderer),
):
    return HTMLResponse(renderer.render(page="services", account=account))


@router.get("/doctors", response_class=HTMLResponse)
def doctors(
    account: Account | None = Depends(get_current_account),
    renderer: PageRendererPort = Depends(get_page_renderer),
):
    return HTMLResponse(renderer.render(page="doctors", account=account))


@router.get("/login", response_class=HTMLResponse, dependencies=[Depends(require_anonymous)])
def login_page(renderer: PageRendererPort = Depends(get_page_renderer)):
    return HTMLResponse(renderer.render(page="login"))


@router.get("/signup", response_class=HTMLResponse, dependencies=[Depends(require_anonymous)])
def signup_page(renderer: PageRendererPort = Depends(get_page_renderer)):
    return HTMLResponse(renderer.render(page="signup"))


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    account: Account = Depends(require_account_page),
    renderer: PageRendererPort = Depends(get_page_renderer),
):
    return HTMLResponse(
        renderer.render(page="dashboard", account=account),
        headers={"Cache-Control": "private, no-store"},
    )
