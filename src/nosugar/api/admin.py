"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from nosugar.domain.budget import Coefficients
from nosugar.domain.errors import InvalidCoefficientsError

if TYPE_CHECKING:
    from nosugar.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/coefficients", dependencies=[Depends(require_admin)])
async def get_coefficients(request: Request) -> dict[str, object]:
    """Return the coefficient table and the resulting base limit."""
    container: AppContainer = request.app.state.container
    coefficients = container.coefficient_service.get()
    return {
        "coefficients": coefficients.to_dict(),
        "base_limit": container.budget_service.base_limit().total,
    }


@router.put("/coefficients", dependencies=[Depends(require_admin)])
async def update_coefficients(
    changes: dict[str, float], request: Request
) -> dict[str, object]:
    """Tune coefficients; the next budget computation uses the new values."""
    container: AppContainer = request.app.state.container
    known = set(Coefficients().to_dict())
    unknown = sorted(set(changes) - known)
    if unknown:
        raise HTTPException(
            status_code=422, detail=f"Unknown coefficients: {', '.join(unknown)}"
        )
    try:
        coefficients = container.coefficient_service.update(changes)
    except InvalidCoefficientsError as exc:
        raise HTTPException(status_code=422, detail=exc.problems) from exc
    return {
        "coefficients": coefficients.to_dict(),
        "base_limit": container.budget_service.base_limit().total,
    }


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal coefficient panel that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>nosugar model settings</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      textarea { width: 100%; height: 24rem; font-family: ui-monospace, monospace; }
    </style>
  </head>
  <body>
    <h1>Model settings</h1>
    <div class="row">
      <label>Admin token</label><br />
      <input id="token" type="password" placeholder="X-Admin-Token" />
    </div>
    <div class="row">
      <button onclick="load()">Load</button>
      <button onclick="save()">Save</button>
      <span id="limit"></span>
    </div>
    <textarea id="values">{}</textarea>
    <script>
      function headers() {
        return {
          'X-Admin-Token': document.getElementById('token').value,
          'Content-Type': 'application/json'
        };
      }
      function show(data) {
        document.getElementById('values').value =
          JSON.stringify(data.coefficients, null, 2);
        document.getElementById('limit').textContent =
          'Base limit: ' + data.base_limit + ' g';
      }
      async function load() {
        const res = await fetch('/admin/coefficients', { headers: headers() });
        if (!res.ok) { alert('Error: ' + res.status); return; }
        show(await res.json());
      }
      async function save() {
        const res = await fetch('/admin/coefficients', {
          method: 'PUT',
          headers: headers(),
          body: document.getElementById('values').value
        });
        if (!res.ok) { alert('Error: ' + res.status); return; }
        show(await res.json());
      }
    </script>
  </body>
</html>
"""
