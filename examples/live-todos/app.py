"""Live todos — synchronous and pushed partial updates in one Chirp app.

Run with::

    python examples/live-todos/app.py

Adding a todo answers the form post with an UpdateSet (the new item is
appended, the form and counter are re-rendered).  A PeriodicPublisher
pushes the server clock to every browser listening on ``/stream``.
"""

from __future__ import annotations

import itertools
import time
from pathlib import Path

from chirp import App, AppConfig, Request, Template

from ripple import RippleConfig, UpdateSet, create

HERE = Path(__file__).parent
TEMPLATES = HERE / "templates"

app = App(AppConfig(template_dir=TEMPLATES))
ripple = create(RippleConfig(templates_dir=TEMPLATES, wire_format="oob"))

_ids = itertools.count(1)
todos: dict[int, str] = {}


def _page_context() -> dict[str, object]:
    return {"todos": todos, "count": len(todos), "time": time.strftime("%H:%M:%S"), "error": ""}


@app.route("/")
async def index(request: Request):
    return Template("index.html", **_page_context())


@app.route("/todos", methods=["POST"])
async def add_todo(request: Request):
    form = await request.form()
    title = form.get("title", "").strip()
    if not title:
        return ripple.responder.respond(
            UpdateSet().replace("new_todo").within_template("index"),
            {**_page_context(), "error": "Title is required"},
            status=422,
        )

    todo_id = next(_ids)
    todos[todo_id] = title
    updates = (
        UpdateSet()
        .append("todos").with_fragment("fragments :: todo")
        .replace("new_todo").within_template("index")
        .update("count").within_template("index")
    )
    return ripple.responder.respond(
        updates, {**_page_context(), "todo_id": todo_id, "title": title, "error": ""},
    )


@app.route("/todos/{todo_id}/delete", methods=["POST"])
async def delete_todo(request: Request, todo_id: int):
    todos.pop(todo_id, None)
    updates = UpdateSet().remove(f"todo-{todo_id}").update("count").within_template("index")
    return ripple.responder.respond(updates, _page_context())


@app.route("/stream")
async def stream(request: Request):
    return ripple.streams.open_stream(timeout=300)


def _clock() -> tuple[UpdateSet, dict[str, object]]:
    return UpdateSet().update("clock").within_template("index"), _page_context()


ripple.publisher(_clock, interval=1.0).install(app)


@app.on_shutdown
async def _close_streams() -> None:
    ripple.registry.close_all()


if __name__ == "__main__":
    app.run()
