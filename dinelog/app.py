from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import (
    compute_analytics,
    compute_dashboard_stats,
    restaurant_visit_stats,
)
from .auth.dependencies import require_scope, require_user
from .auth.users import authenticate, get_current_group_id, register, set_current_group_id
from .config import DEFAULT_APP_CONFIG
from .journal.groups import get_group, groups_for_user, is_member
from .journal.models import (
    DashboardStats,
    GroupOut,
    GroupsResponse,
    GroupSwitchRequest,
    LoginRequest,
    RandomSuggestion,
    RegisterRequest,
    RestaurantCreate,
    RestaurantWithStats,
    Suggestion,
    VisitCreate,
    VisitWithRestaurant,
)
from .journal.scope import Scope, is_group
from .journal.store import (
    add_restaurant,
    add_visit,
    find_restaurants,
    find_visits,
    get_restaurant,
)
from .recommendations.scoring import random_suggestion
from .recommendations.suggestions import build_suggestions

logging.basicConfig(level=DEFAULT_APP_CONFIG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Dining Journal API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_APP_CONFIG.session_secret)


@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register")
def register_user(body: RegisterRequest, request: Request) -> dict:
    user = register(body.name, body.email, body.password)
    if not user:
        raise HTTPException(status_code=409, detail="Email already registered")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request, user: dict = Depends(require_user)) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Groups ───────────────────────────────────────────────────────────────


@app.get("/groups", response_model=GroupsResponse)
def list_groups(user: dict = Depends(require_user)) -> GroupsResponse:
    groups = [GroupOut(**g) for g in groups_for_user(user["id"])]
    current_id = get_current_group_id(user["id"])
    current = next((g for g in groups if g.id == current_id), None)
    return GroupsResponse(groups=groups, current_group=current)


@app.post("/groups/switch")
def switch_group(body: GroupSwitchRequest, user: dict = Depends(require_user)) -> dict:
    if not body.group_id:
        set_current_group_id(user["id"], None)
        logger.info("User %s switched to personal scope", user["id"])
        return {"success": True}

    if not get_group(body.group_id) or not is_member(body.group_id, user["id"]):
        raise HTTPException(status_code=404, detail="Group not found or access denied")

    set_current_group_id(user["id"], body.group_id)
    logger.info("User %s switched to group %s", user["id"], body.group_id)
    return {"success": True}


# ── Restaurants & visits ─────────────────────────────────────────────────


@app.get("/restaurants", response_model=list[RestaurantWithStats])
def list_restaurants(scope: Scope = Depends(require_scope)) -> list[RestaurantWithStats]:
    stats = restaurant_visit_stats(find_visits(scope))
    result = []
    for r in find_restaurants(scope, sort_by_name=True):
        s = stats.get(r.id)
        result.append(RestaurantWithStats(
            **r.model_dump(),
            total_visits=s["visits"] if s else 0,
            average_rating=s["avg_rating"] if s else 0.0,
        ))
    return result


@app.post("/restaurants", response_model=RestaurantWithStats)
def create_restaurant(
    body: RestaurantCreate,
    user: dict = Depends(require_user),
    scope: Scope = Depends(require_scope),
) -> RestaurantWithStats:
    restaurant = add_restaurant(scope, user, body)
    return RestaurantWithStats(**restaurant.model_dump())


@app.get("/visits", response_model=list[VisitWithRestaurant])
def list_visits(
    limit: int | None = Query(default=None, ge=1),
    scope: Scope = Depends(require_scope),
) -> list[VisitWithRestaurant]:
    by_id = {r.id: r for r in find_restaurants(scope)}
    return [
        VisitWithRestaurant(**v.model_dump(), restaurant=by_id.get(v.restaurant_id))
        for v in find_visits(scope, descending=True, limit=limit)
    ]


@app.post("/visits", response_model=VisitWithRestaurant)
def create_visit(
    body: VisitCreate,
    user: dict = Depends(require_user),
    scope: Scope = Depends(require_scope),
) -> VisitWithRestaurant:
    restaurant = get_restaurant(scope, body.restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    visit = add_visit(scope, user, body)
    return VisitWithRestaurant(**visit.model_dump(), restaurant=restaurant)


# ── Dashboard & analytics ────────────────────────────────────────────────


@app.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(scope: Scope = Depends(require_scope)) -> DashboardStats:
    return compute_dashboard_stats(find_visits(scope), find_restaurants(scope))


@app.get("/analytics")
def analytics(scope: Scope = Depends(require_scope)) -> dict:
    return compute_analytics(find_visits(scope), find_restaurants(scope))


# ── Suggestions ──────────────────────────────────────────────────────────


@app.get("/suggestions", response_model=list[Suggestion])
def suggestions(scope: Scope = Depends(require_scope)) -> list[Suggestion]:
    return build_suggestions(
        find_visits(scope, descending=True),
        find_restaurants(scope),
        group=is_group(scope),
    )


@app.get(
    "/suggestions/random",
    response_model=RandomSuggestion,
    response_model_exclude_none=True,
)
def suggestions_random(scope: Scope = Depends(require_scope)) -> RandomSuggestion:
    return random_suggestion(
        find_restaurants(scope),
        find_visits(scope, descending=True),
        group=is_group(scope),
    )
