"""Journal HTML pages: write/edit form, entry view, collection view, dashboard."""

from __future__ import annotations

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from reflect.core.utils.decorators import csrf_protected
from reflect.core.utils.validation import field_errors
from reflect.domains.journal.moods import get_mood, list_moods
from reflect.domains.journal.schemas.journal_schemas import CollectionCreate
from reflect.domains.journal.services import collection_service, journal_service
from reflect.domains.journal.services.journal_service import UNORGANIZED
from reflect.domains.journal.workflow import NEW_COLLECTION, EntryAuthoringWorkflow, ServiceJournalActions
from reflect.domains.journal.workflow.invoker import describe_error
from reflect.domains.journal.workflow.web import FlashNotifier, RedirectNavigator

journal_pages_bp = Blueprint("journal_pages", __name__)
collection_pages_bp = Blueprint("collection_pages", __name__)
dashboard_pages_bp = Blueprint("dashboard_pages", __name__)

WRITE_ACTIONS = ("publish", "draft", "cancel")


def _workflow() -> tuple[EntryAuthoringWorkflow, RedirectNavigator]:
    navigator = RedirectNavigator()
    workflow = EntryAuthoringWorkflow(
        ServiceJournalActions(),
        int(get_jwt_identity()),
        notifier=FlashNotifier(),
        navigator=navigator,
        edit_id=request.args.get("edit") or None,
    )
    workflow.initialize()
    return workflow, navigator


def _render_write(workflow: EntryAuthoringWorkflow, status: int = 200):
    return (
        render_template(
            "journal/write.html",
            workflow=workflow,
            moods=list_moods(),
            new_collection=NEW_COLLECTION,
        ),
        status,
    )


@journal_pages_bp.get("/write")
@jwt_required()
def write_entry():
    workflow, _ = _workflow()
    if workflow.is_edit_mode and workflow.source is None:
        return _render_write(workflow, 404)
    return _render_write(workflow)


@journal_pages_bp.post("/write")
@jwt_required()
@csrf_protected
def submit_entry():
    workflow, navigator = _workflow()
    if workflow.is_edit_mode and workflow.source is None:
        return _render_write(workflow, 404)

    action = request.form.get("action", "publish")
    if action not in WRITE_ACTIONS:
        abort(400)
    if action == "cancel":
        workflow.cancel()
        return redirect(navigator.location or url_for("journal_pages.write_entry"))

    workflow.apply(request.form)
    if workflow.dialog.is_open:
        # "Create new collection" was picked; show the dialog instead of saving.
        return _render_write(workflow)

    if action == "draft":
        workflow.save_draft()
        return _render_write(workflow)

    if workflow.submit():
        return redirect(navigator.location)
    return _render_write(workflow, 400 if workflow.errors else 200)


@journal_pages_bp.post("/write/collection")
@jwt_required()
@csrf_protected
def create_collection_inline():
    workflow, _ = _workflow()
    if workflow.is_edit_mode and workflow.source is None:
        return _render_write(workflow, 404)
    form = {k: v for k, v in request.form.items() if k != "collection_id" or v != NEW_COLLECTION}
    workflow.apply(form)
    ok = workflow.create_collection(request.form.get("collection_name"))
    return _render_write(workflow, 200 if ok else 400)


@journal_pages_bp.get("/<int:entry_id>")
@jwt_required()
def entry_view(entry_id: int):
    user_id = int(get_jwt_identity())
    entry = journal_service.get_entry(user_id, entry_id)
    if not entry:
        abort(404)
    collection = (
        collection_service.get_collection(user_id, entry.collection_id) if entry.collection_id else None
    )
    return render_template(
        "journal/entry.html",
        entry=entry,
        mood=get_mood(entry.mood),
        collection=collection,
    )


@journal_pages_bp.post("/<int:entry_id>/delete")
@jwt_required()
@csrf_protected
def delete_entry(entry_id: int):
    user_id = int(get_jwt_identity())
    entry = journal_service.get_entry(user_id, entry_id)
    if not entry:
        abort(404)
    collection_id = entry.collection_id
    journal_service.delete_entry(user_id, entry_id)
    flash("Entry deleted", "success")
    return redirect(url_for("collection_pages.collection_view", collection_id=collection_id or UNORGANIZED))


@collection_pages_bp.get("/<collection_id>")
@jwt_required()
def collection_view(collection_id: str):
    user_id = int(get_jwt_identity())
    page = request.args.get("page", 1, type=int) or 1
    per_page = current_app.config.get("ENTRIES_PER_PAGE", 20)

    if collection_id == UNORGANIZED:
        collection = None
        entries, total = journal_service.list_entries(user_id, unorganized=True, page=page, per_page=per_page)
    else:
        if not collection_id.isdigit():
            abort(404)
        collection = collection_service.get_collection(user_id, int(collection_id))
        if not collection:
            abort(404)
        entries, total = journal_service.list_entries(
            user_id, collection_id=collection.id, page=page, per_page=per_page
        )

    return render_template(
        "collection/view.html",
        collection=collection,
        entries=entries,
        moods={m.id: m for m in list_moods()},
        page=page,
        pages=(total + per_page - 1) // per_page,
        total=total,
    )


@dashboard_pages_bp.get("")
@jwt_required()
def dashboard():
    user_id = int(get_jwt_identity())
    return render_template(
        "dashboard/index.html",
        collections=collection_service.list_collections(user_id),
        entries_by_collection=journal_service.entries_by_collection(user_id),
        unorganized_key=UNORGANIZED,
        moods={m.id: m for m in list_moods()},
    )


@dashboard_pages_bp.post("/collections")
@jwt_required()
@csrf_protected
def create_collection():
    user_id = int(get_jwt_identity())
    try:
        data = CollectionCreate.model_validate({"name": request.form.get("name")})
    except ValidationError as exc:
        flash(field_errors(exc)["name"], "danger")
        return redirect(url_for("dashboard_pages.dashboard"))
    try:
        collection = collection_service.create_collection(user_id, data.name)
    except ValueError as exc:
        flash(describe_error(exc), "danger")
        return redirect(url_for("dashboard_pages.dashboard"))
    flash(f"Collection {collection.name} created!", "success")
    return redirect(url_for("dashboard_pages.dashboard"))
