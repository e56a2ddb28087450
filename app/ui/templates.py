"""
HTML rendering for the UI pages.
"""

from html import escape
from typing import Dict, List, Optional
from urllib.parse import urlencode

from ..schemas.event import EventResponse
from .dashboard import DashboardStats, DashboardView
from .detail import EventDetailView
from .forms import EventFormData, category_options

STYLES = """
body { margin: 0; font-family: system-ui, sans-serif; background: #0b1220; color: #e2e8f0; }
main { max-width: 72rem; margin: 0 auto; padding: 1rem 1.5rem; }
a { color: #93c5fd; }
.stats { display: grid; grid-template-columns: repeat(4, 1fr); gap: .75rem; }
.card { border: 1px solid #1e293b; border-radius: .75rem; padding: .75rem 1rem; background: #0d1526; }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: .6rem .75rem; border-bottom: 1px solid #1e293b; }
.badge { border-radius: 999px; padding: .1rem .6rem; font-size: .8rem; font-weight: 600; }
.status-upcoming { color: #6ee7b7; } .status-ongoing { color: #7dd3fc; }
.status-completed { color: #e2e8f0; } .status-cancelled { color: #fda4af; }
.error { color: #fda4af; } .field-error { color: #fda4af; font-size: .8rem; }
.pager a, .pager span { margin-right: .35rem; }
.pager .current { font-weight: 700; }
label { display: block; margin-top: .75rem; }
input, textarea, select { width: 100%; padding: .4rem; }
"""


def layout(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape(title)}</title>
<style>{STYLES}</style>
</head>
<body><main>{body}</main></body>
</html>"""


def render_error(message: str, retry_href: Optional[str] = None) -> str:
    retry = f' <a class="retry" href="{escape(retry_href)}">Try again</a>' if retry_href else ""
    return f'<div class="error" role="alert"><p>{escape(message)}</p>{retry}</div>'


def render_empty_state(title: str, description: str, action_label: str, action_href: str) -> str:
    return (
        f'<div class="empty-state"><h4>{escape(title)}</h4>'
        f'<p>{escape(description)}</p>'
        f'<a href="{escape(action_href)}">{escape(action_label)}</a></div>'
    )


def render_stats(stats: DashboardStats) -> str:
    cards = [
        ("Total events", stats.total),
        ("Upcoming events", stats.upcoming),
        ("Ongoing events", stats.ongoing),
        ("Cancelled events", stats.cancelled),
    ]
    return '<div class="stats">' + "".join(
        f'<div class="card"><p>{label}</p><p class="stat-value">{value}</p></div>'
        for label, value in cards
    ) + "</div>"


def _dashboard_href(base: str, search_term: str, page: int, known_count: int) -> str:
    query = {"page": page, "n": known_count}
    if search_term:
        query["q"] = search_term
    return f"{base}?{urlencode(query)}"


def render_pager(view: DashboardView, base: str) -> str:
    page = view.page
    if page is None:
        return ""
    parts = []
    if page.has_prev:
        parts.append(f'<a href="{escape(_dashboard_href(base, view.search_term, page.page - 1, view.known_count))}">&lsaquo;</a>')
    for number in page.page_buttons:
        if number == page.page:
            parts.append(f'<span class="current">{number}</span>')
        else:
            parts.append(f'<a href="{escape(_dashboard_href(base, view.search_term, number, view.known_count))}">{number}</a>')
    if page.show_ellipsis:
        parts.append("<span>...</span>")
    if page.has_next:
        parts.append(f'<a href="{escape(_dashboard_href(base, view.search_term, page.page + 1, view.known_count))}">&rsaquo;</a>')
    summary = page.summary if page.total_items else ""
    return f'<nav class="pager">{"".join(parts)}</nav><p class="summary">{summary}</p>'


def render_dashboard(view: DashboardView, base: str = "/ui") -> str:
    search = (
        f'<form method="get" action="{base}">'
        f'<input type="search" name="q" value="{escape(view.search_term)}" '
        f'placeholder="Search by event, location">'
        f'</form>'
    )

    if view.error is not None:
        body_rows = render_error(view.error, f"{base}?refresh=1")
    elif view.is_empty:
        body_rows = render_empty_state(
            "No events found",
            "Try adjusting your search or filters",
            "Create Event",
            f"{base}/events/create",
        )
    else:
        rows = []
        for row in view.rows:
            rows.append(
                "<tr>"
                f'<td><span class="initial">{escape(row.initial)}</span> '
                f'<a href="{base}/events/{row.id}">{escape(row.title)}</a></td>'
                f"<td>{escape(row.when)}</td>"
                f"<td>{escape(row.location)}</td>"
                f"<td>{escape(row.tickets_sold)}</td>"
                f'<td><span class="badge {row.status.color_class}">{row.status.label.value}</span></td>'
                "</tr>"
            )
        body_rows = (
            "<table><thead><tr><th>Event Name</th><th>Date &amp; Time</th>"
            "<th>Location</th><th>Tickets Sold</th><th>Status</th></tr></thead>"
            f"<tbody>{''.join(rows)}</tbody></table>"
        )

    body = (
        "<header><p>Event Management</p><h1>Events</h1></header>"
        "<h2>Event Overview</h2>"
        f"{render_stats(view.stats)}"
        f'<section><h3>Events ({view.filtered_count})</h3>{search}'
        f'<a class="button" href="{base}/events/create">+ Create Event</a>'
        f"{body_rows}{render_pager(view, base)}</section>"
    )
    return layout("Events", body)


def render_detail(view: EventDetailView, base: str = "/ui") -> str:
    if view.event is None:
        if view.not_found:
            return render_not_found(base)
        return layout("Event", render_error(view.error or "Something went wrong",
                                            f"{base}?refresh=1"))

    event = view.event
    image = f'<img src="{escape(event.image_url)}" alt="">' if event.image_url else ""
    body = (
        f'<a href="{base}">&larr; Back to events</a>'
        f"{image}"
        f'<h1>{escape(event.title)}</h1>'
        f'<span class="badge {view.status.color_class}">{view.status.label.value}</span>'
        f"<p>{escape(event.description)}</p>"
        '<div class="card">'
        f"<p>Date: {escape(view.long_date)} at {escape(view.start_time)}</p>"
        f"<p>Date Range (UTC): {escape(view.date_range)}</p>"
        f"<p>Location: {escape(event.location)}</p>"
        f"<p>Category: {escape(event.category)}</p>"
        f"<p>Max attendees: {escape(view.capacity)}</p>"
        "</div>"
        '<div class="stats">'
        f'<div class="card"><p>Tickets sold</p><p>{view.tickets_sold_text}</p></div>'
        f'<div class="card"><p>Estimated revenue</p><p>{view.estimated_revenue_text}</p></div>'
        f'<div class="card"><p>Unique attendees</p><p>{view.unique_attendees_text}</p></div>'
        "</div>"
        f'<a class="button" href="{base}/events/{event.id}/edit">Edit Event</a> '
        f'<a class="button danger" href="{base}/events/{event.id}/delete">Delete Event</a>'
    )
    return layout(event.title, body)


def _field(name: str, label: str, control: str, errors: Dict[str, str]) -> str:
    error = errors.get(name)
    error_html = f'<p class="field-error">{escape(error)}</p>' if error else ""
    return f'<label for="{name}">{label}</label>{control}{error_html}'


def render_form(data: EventFormData, errors: Dict[str, str], action: str,
                categories: List[str], editing: bool = False,
                error_message: Optional[str] = None, cancel_href: str = "/ui") -> str:
    def text_input(name: str, input_type: str = "text") -> str:
        return (f'<input id="{name}" name="{name}" type="{input_type}" '
                f'value="{escape(getattr(data, name))}">')

    options = ['<option value="">Select a category</option>'] + [
        f'<option value="{escape(c)}"{" selected" if c == data.category else ""}>{escape(c)}</option>'
        for c in category_options(data.category, categories)
    ]
    checked = " checked" if data.is_active else ""
    banner = render_error(error_message) if error_message else ""
    title = "Edit Event" if editing else "Create Event"

    body = (
        f"<h1>{title}</h1>{banner}"
        f'<form method="post" action="{escape(action)}" novalidate>'
        + _field("title", "Event Title", text_input("title"), errors)
        + _field("description", "Description",
                 f'<textarea id="description" name="description">{escape(data.description)}</textarea>',
                 errors)
        + _field("location", "Location", text_input("location"), errors)
        + _field("category", "Category",
                 f'<select id="category" name="category">{"".join(options)}</select>', errors)
        + _field("start_date", "Start Date &amp; Time", text_input("start_date", "datetime-local"), errors)
        + _field("end_date", "End Date &amp; Time", text_input("end_date", "datetime-local"), errors)
        + _field("max_attendees", "Max Attendees (optional)", text_input("max_attendees", "number"), errors)
        + _field("image_url", "Image URL (optional)", text_input("image_url", "url"), errors)
        + f'<label><input type="checkbox" name="is_active"{checked}> Event is active</label>'
        + f'<button type="submit">{"Update Event" if editing else "Create Event"}</button> '
        + f'<a href="{escape(cancel_href)}">Cancel</a>'
        + "</form>"
    )
    return layout(title, body)


def render_confirm_delete(event: EventResponse, base: str = "/ui",
                          error_message: Optional[str] = None) -> str:
    banner = render_error(error_message) if error_message else ""
    body = (
        "<h1>Delete Event</h1>"
        f"{banner}"
        f"<p>Are you sure you want to delete &quot;{escape(event.title)}&quot;? "
        "This action cannot be undone.</p>"
        f'<form method="post" action="{base}/events/{event.id}/delete">'
        '<button type="submit">Delete</button> '
        f'<a href="{base}/events/{event.id}">Cancel</a></form>'
    )
    return layout("Delete Event", body)


def render_not_found(base: str = "/ui") -> str:
    return layout("Event not found", render_empty_state(
        "Event not found",
        "The event you are looking for does not exist or has been deleted.",
        "Back to events",
        base,
    ))
