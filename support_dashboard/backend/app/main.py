# support_dashboard/backend/app/main.py
import logging
from html import escape
from typing import List, Optional

from fastapi import Depends, FastAPI, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from .api.v1.dashboard import router as dashboard_router
from .api.v1.tickets import apply_ticket_changes, get_ticket_or_404
from .api.v1.tickets import router as tickets_router
from .config import configure_logging, get_settings
from .dashboard.controller import DashboardController
from .db import get_db
from .deps import get_controller, get_local_controller, uses_local_store
from .labels import ALLOWED_CATEGORIES, ALLOWED_PRIORITIES, ALLOWED_STATUSES
from .schemas.dashboard import ALL, DashboardView, FilterSpec
from .schemas.ticket import TicketRead
from .store import build_store

logger = logging.getLogger(__name__)

app = FastAPI(title="Support Ticket Dashboard")


@app.on_event("startup")
async def init_dashboard():
    settings = get_settings()
    configure_logging(settings)
    controller = DashboardController(
        build_store(settings),
        tz=settings.resolved_today_tz(),
    )
    app.state.controller = controller
    logger.info("Dashboard using %s ticket store", settings.ticket_store)
    # initial load; failures end up in controller.last_error
    await controller.reload()


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
async def root_redirect():
    return RedirectResponse(url="/dashboard", status_code=302)


# Helpers for display

STATS_CARDS = [
    ("Open Tickets", "open_count", "#3b82f6", "Awaiting response"),
    ("In Progress", "in_progress_count", "#f59e0b", "Being worked on"),
    ("Urgent Priority", "urgent_count", "#ef4444", "Require immediate attention"),
    ("Resolved Today", "resolved_today_count", "#10b981", "Completed tickets"),
]


def humanize(value: str) -> str:
    return value.replace("_", " ").title()


def render_options(allowed: List[str], current: str, all_label: str) -> str:
    values = [ALL] + list(allowed)
    # keep a value we don't know about selectable, e.g. from a remote store
    if current and current not in values:
        values.append(current)
    out = ""
    for v in values:
        label = all_label if v == ALL else humanize(v)
        selected = " selected" if v == current else ""
        out += f"<option value='{escape(v)}'{selected}>{escape(label)}</option>"
    return out


def render_stats(view: DashboardView) -> str:
    cards = ""
    for title, attr, color, description in STATS_CARDS:
        value = getattr(view.statistics, attr)
        cards += (
            f"<div class='stat-card' style='border-top-color:{color}'>"
            f"<div class='stat-title'>{title}</div>"
            f"<div class='stat-value'>{value}</div>"
            f"<div class='stat-desc'>{description}</div>"
            f"</div>"
        )
    return cards


def render_ticket_list(view: DashboardView) -> str:
    if view.is_loading:
        return "<div class='placeholder'>Loading tickets…</div>" * 5
    if not view.filtered_tickets:
        return "<p class='empty'>No tickets match the current filters.</p>"

    selected_id = view.selected_ticket.id if view.selected_ticket else None
    rows = ""
    for t in view.filtered_tickets:
        css = "ticket-row selected" if t.id == selected_id else "ticket-row"
        created_str = t.created_at.isoformat(sep=" ", timespec="minutes")
        rows += (
            f"<a class='{css}' href='/dashboard/select/{escape(t.id)}'>"
            f"<div class='ticket-title'>{escape(t.title)}</div>"
            f"<div class='ticket-meta'>{escape(t.requester_name)} · {created_str}</div>"
            f"<span class='pill'>{escape(humanize(t.status))}</span>"
            f"<span class='pill prio-{escape(t.priority)}'>{escape(humanize(t.priority))}</span>"
            f"<span class='pill'>{escape(humanize(t.category))}</span>"
            f"</a>"
        )
    return rows


def render_edit_form(ticket: TicketRead) -> str:
    status_opts = render_options(ALLOWED_STATUSES, ticket.status, "—")
    priority_opts = render_options(ALLOWED_PRIORITIES, ticket.priority, "—")
    return f"""
        <div class="section-title">Update ticket</div>
        <form method="post" action="/tickets/{escape(ticket.id)}/edit" class="filters-form">
          <div><label>Status</label><br/><select name="status">{status_opts}</select></div>
          <div><label>Priority</label><br/><select name="priority">{priority_opts}</select></div>
          <div><label>&nbsp;</label><br/><button type="submit">Save changes</button></div>
        </form>
    """


def render_details(ticket: Optional[TicketRead], editable: bool = True) -> str:
    if ticket is None:
        return (
            "<div class='card details-empty'>"
            "Select a ticket to see its details."
            "</div>"
        )

    email = f" &lt;{escape(ticket.requester_email)}&gt;" if ticket.requester_email else ""
    # remote tickets are edited in the remote store, not here
    edit_form = render_edit_form(ticket) if editable else ""
    return f"""
      <div class="card">
        <div class="details-header">
          <h2>{escape(ticket.title)}</h2>
          <a href="/dashboard/select">Close</a>
        </div>
        <div class="meta">
          Created {ticket.created_at.isoformat(sep=" ", timespec="seconds")} ·
          Updated {ticket.updated_at.isoformat(sep=" ", timespec="seconds")}
        </div>
        <div class="field-row"><div class="field-label">Requester</div>
          <div>{escape(ticket.requester_name)}{email}</div></div>
        <div class="field-row"><div class="field-label">Category</div>
          <div>{escape(humanize(ticket.category))}</div></div>
        <div class="section-title">Description</div>
        <pre>{escape(ticket.description) or "—"}</pre>
        {edit_form}
      </div>
    """


def render_dashboard(view: DashboardView, editable: bool = True) -> str:
    f = view.filters
    error_banner = (
        f"<div class='error-banner'>Could not load tickets: {escape(view.last_error)}</div>"
        if view.last_error
        else ""
    )
    filters_badge = "" if f.is_neutral() else "<span class='filters-active'>Filters active</span>"
    return f"""
    <!DOCTYPE html>
    <html>
      <head>
        <meta charset="utf-8" />
        <title>Support Ticket Dashboard</title>
        <style>
          * {{ box-sizing: border-box; }}
          body {{
            margin: 0;
            font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
            background: #f8fafc;
            color: #111827;
          }}
          a {{ color: #2563eb; text-decoration: none; }}
          .page {{ max-width: 1200px; margin: 32px auto 40px; padding: 0 24px 24px; }}
          .page-header {{
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 24px;
          }}
          .page-header h1 {{ margin: 0 0 6px; font-size: 28px; }}
          .page-header p {{ margin: 0; color: #4b5563; }}
          .stats {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(220px, 1fr));
            gap: 20px;
            margin-bottom: 24px;
          }}
          .stat-card, .card {{
            background: #fff;
            border-radius: 12px;
            padding: 18px 20px;
            box-shadow: 0 1px 3px rgba(15, 23, 42, 0.08);
          }}
          .stat-card {{ border-top: 4px solid #3b82f6; }}
          .stat-title {{ font-size: 13px; color: #6b7280; }}
          .stat-value {{ font-size: 30px; font-weight: 700; margin: 4px 0; }}
          .stat-desc {{ font-size: 12px; color: #9ca3af; }}
          .filters-form {{
            display: flex;
            flex-wrap: wrap;
            gap: 10px 16px;
            align-items: center;
          }}
          .filters-form label {{
            font-size: 12px;
            text-transform: uppercase;
            letter-spacing: 0.08em;
            color: #6b7280;
          }}
          .filters-form input, .filters-form select {{
            border-radius: 8px;
            border: 1px solid #d1d5db;
            padding: 6px 10px;
            font-size: 13px;
            min-width: 160px;
          }}
          button {{
            padding: 7px 16px;
            border-radius: 8px;
            border: none;
            background: #2563eb;
            color: #fff;
            font-weight: 600;
            font-size: 13px;
            cursor: pointer;
          }}
          button.secondary {{ background: #e5e7eb; color: #111827; }}
          .layout {{
            display: grid;
            grid-template-columns: 2fr 3fr;
            gap: 24px;
            margin-top: 24px;
          }}
          .ticket-row {{
            display: block;
            padding: 12px 14px;
            border-radius: 10px;
            border: 1px solid #e5e7eb;
            margin-bottom: 10px;
            color: inherit;
          }}
          .ticket-row.selected {{ border-color: #2563eb; background: #eff6ff; }}
          .ticket-title {{ font-weight: 600; }}
          .ticket-meta {{ font-size: 12px; color: #6b7280; margin: 4px 0 6px; }}
          .filters-active {{
            font-size: 12px;
            font-weight: 500;
            color: #2563eb;
            margin-left: 8px;
          }}
          .pill {{
            display: inline-block;
            padding: 2px 8px;
            margin-right: 4px;
            border-radius: 999px;
            background: #f3f4f6;
            font-size: 11px;
          }}
          .prio-urgent {{ background: #fee2e2; color: #b91c1c; }}
          .prio-high {{ background: #ffedd5; color: #c2410c; }}
          .placeholder {{
            height: 72px;
            border-radius: 10px;
            background: #e5e7eb;
            margin-bottom: 10px;
          }}
          .error-banner {{
            background: #fef2f2;
            border: 1px solid #fecaca;
            color: #991b1b;
            border-radius: 10px;
            padding: 10px 14px;
            margin-bottom: 16px;
          }}
          .details-header {{ display: flex; justify-content: space-between; align-items: baseline; }}
          .details-header h2 {{ margin: 0; }}
          .details-empty {{ color: #6b7280; text-align: center; padding: 48px; }}
          .meta {{ font-size: 13px; color: #6b7280; margin: 6px 0 16px; }}
          .section-title {{
            font-size: 12px;
            text-transform: uppercase;
            letter-spacing: 0.1em;
            color: #6b7280;
            margin: 18px 0 8px;
          }}
          .field-row {{ display: flex; gap: 16px; margin-bottom: 6px; font-size: 14px; }}
          .field-label {{ width: 110px; color: #6b7280; }}
          pre {{
            background: #f9fafb;
            border-radius: 8px;
            padding: 10px 12px;
            font-size: 13px;
            white-space: pre-wrap;
          }}
        </style>
      </head>
      <body>
        <main class="page">
          <div class="page-header">
            <div>
              <h1>Support Ticket Dashboard</h1>
              <p>Manage and track all technology support requests</p>
            </div>
            <form method="post" action="/dashboard/reload">
              <button type="submit">Refresh</button>
            </form>
          </div>

          {error_banner}

          <section class="stats">
            {render_stats(view)}
          </section>

          <section class="card">
            <form class="filters-form" method="post" action="/dashboard/filters">
              <div>
                <label>Search</label><br/>
                <input type="text" name="search" value="{escape(f.search)}"
                       placeholder="Title, description, requester" />
              </div>
              <div>
                <label>Status</label><br/>
                <select name="status">{render_options(ALLOWED_STATUSES, f.status, "All statuses")}</select>
              </div>
              <div>
                <label>Priority</label><br/>
                <select name="priority">{render_options(ALLOWED_PRIORITIES, f.priority, "All priorities")}</select>
              </div>
              <div>
                <label>Category</label><br/>
                <select name="category">{render_options(ALLOWED_CATEGORIES, f.category, "All categories")}</select>
              </div>
              <div>
                <label>&nbsp;</label><br/>
                <button type="submit">Apply filters</button>
                <button type="submit" class="secondary"
                        formaction="/dashboard/filters/clear">Clear</button>
              </div>
            </form>
          </section>

          <div class="layout">
            <section class="card">
              <h2>Tickets ({len(view.filtered_tickets)}) {filters_badge}</h2>
              {render_ticket_list(view)}
            </section>
            <section>
              {render_details(view.selected_ticket, editable)}
            </section>
          </div>
        </main>
      </body>
    </html>
    """


# Dashboard (HTML)

@app.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(controller: DashboardController = Depends(get_controller)):
    return render_dashboard(controller.derived_view(), uses_local_store(controller))


@app.post("/dashboard/filters")
def dashboard_filters(
    search: str = Form(""),
    status: str = Form(ALL),
    priority: str = Form(ALL),
    category: str = Form(ALL),
    controller: DashboardController = Depends(get_controller),
):
    controller.update_filters(
        FilterSpec(search=search, status=status, priority=priority, category=category)
    )
    return RedirectResponse(url="/dashboard", status_code=303)


@app.post("/dashboard/filters/clear")
def dashboard_clear_filters(controller: DashboardController = Depends(get_controller)):
    controller.clear_filters()
    return RedirectResponse(url="/dashboard", status_code=303)


@app.post("/dashboard/reload")
async def dashboard_reload(controller: DashboardController = Depends(get_controller)):
    await controller.reload()
    return RedirectResponse(url="/dashboard", status_code=303)


@app.get("/dashboard/select")
def dashboard_clear_selection(controller: DashboardController = Depends(get_controller)):
    controller.select_ticket(None)
    return RedirectResponse(url="/dashboard", status_code=303)


@app.get("/dashboard/select/{ticket_id}")
def dashboard_select(
    ticket_id: str,
    controller: DashboardController = Depends(get_controller),
):
    controller.select_ticket(ticket_id)
    return RedirectResponse(url="/dashboard", status_code=303)


# Detail pane edit (HTML form)

@app.post("/tickets/{ticket_id}/edit")
async def ticket_edit_html(
    ticket_id: str,
    status: Optional[str] = Form(None),
    priority: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    controller: DashboardController = Depends(get_local_controller),
):
    ticket = get_ticket_or_404(db, ticket_id)
    # "all" is what the selects send when nothing was picked
    form = {"status": status, "priority": priority, "category": category}
    data = {k: (None if v == ALL else v) for k, v in form.items()}
    changes = apply_ticket_changes(db, ticket, data)
    db.commit()

    if changes:
        logger.info("Updated ticket %s: %s", ticket_id, ", ".join(sorted(changes)))
        await controller.reload()
    controller.select_ticket(ticket_id)

    # After POST, always go back to the dashboard with the ticket open
    return RedirectResponse(url="/dashboard", status_code=303)


# JSON API v1
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(tickets_router, prefix="/api/v1")
