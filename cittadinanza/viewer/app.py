"""
Web Viewer - Flask Application.

Serves the pre-screening form for a single local user: applicant and lineage
details, document upload, the live score card, the JSON summary download and
the "request contact" action. All state lives in one in-memory Session.

Routes:
    /                               Form + score card
    /api/evaluation                 Current score, label and flags
    /api/applicant                  Read / update applicant fields
    /api/lineage                    Read / update lineage fields
    /api/documents                  List / upload documents
    /api/documents/<doc_id>         Remove one document
    /api/export                     Download the JSON summary
    /api/disclaimer                 Acknowledge (or withdraw) the disclaimer
    /api/contact                    Request contact (requires the disclaimer)
    /api/reset                      Start over
"""

import logging
from datetime import datetime, timezone

from flask import Flask, Response, abort, jsonify, render_template, request

from ..config import Config, DEFAULT_CONFIG
from ..models.applicant import ApplicantProfile, LineageFacts, RelationshipDegree
from ..models.document import ClassifiedDocument, DocumentCategory
from ..export import render_summary
from ..session import DisclaimerNotAccepted, Session

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None, session: Session | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Viewer/export/display settings. Defaults to DEFAULT_CONFIG.
        session: Session to serve. A fresh one is built from ``config`` if None.

    Returns:
        Configured Flask app.
    """
    config = config or DEFAULT_CONFIG

    app = Flask(__name__)
    app.config["CITTADINANZA"] = config
    app.config["SESSION_STATE"] = session or Session.from_config(config)
    app.config["MAX_CONTENT_LENGTH"] = config.viewer.max_upload_mb * 1024 * 1024

    # ── Helper Functions ──

    def _session() -> Session:
        return app.config["SESSION_STATE"]

    def _evaluation_payload() -> dict:
        result = _session().evaluation
        payload = result.to_dict()
        payload["tier"] = result.tier
        return payload

    def _document_payload(doc: ClassifiedDocument) -> dict:
        payload = doc.to_dict()
        payload["id"] = doc.id
        payload["displayType"] = doc.inferred_category.display_name
        payload["pdfOrImage"] = doc.is_pdf_or_image
        return payload

    def _json_body() -> dict:
        """Parsed JSON object from the request, or a 400."""
        incoming = request.get_json(silent=True)
        if not isinstance(incoming, dict):
            abort(400, description="Invalid JSON")
        return incoming

    def _merge(current: dict, incoming: dict, what: str) -> dict:
        """Overlay incoming export-format keys on the current values, or a 400."""
        unknown = set(incoming) - set(current)
        if unknown:
            logger.warning(f"Rejected {what} update with unknown fields: {sorted(unknown)}")
            abort(400, description=f"Unknown {what} field(s): {', '.join(sorted(unknown))}")
        merged = dict(current)
        merged.update(incoming)
        return merged

    # ── HTML Routes ──

    @app.route("/")
    def index():
        """Form page with the live score card."""
        s = _session()
        return render_template(
            "index.html",
            applicant=s.applicant,
            lineage=s.lineage,
            documents=s.documents,
            evaluation=s.evaluation,
            disclaimer_accepted=s.disclaimer_accepted,
            degrees=list(RelationshipDegree),
            accept=config.accept_attribute(),
            max_flags=config.display.max_flags_shown,
            year=datetime.now().year,
        )

    # ── API Routes ──

    @app.route("/api/evaluation")
    def api_evaluation():
        return jsonify(_evaluation_payload())

    @app.route("/api/applicant", methods=["GET", "POST"])
    def api_applicant():
        """Read or update the applicant profile (camelCase keys)."""
        s = _session()
        if request.method == "POST":
            merged = _merge(s.applicant.to_dict(), _json_body(), "applicant")
            s.set_applicant(ApplicantProfile.from_dict(merged))
        return jsonify({"applicant": s.applicant.to_dict(), "evaluation": _evaluation_payload()})

    @app.route("/api/lineage", methods=["GET", "POST"])
    def api_lineage():
        """Read or update the lineage facts (camelCase keys)."""
        s = _session()
        if request.method == "POST":
            merged = _merge(s.lineage.to_dict(), _json_body(), "lineage")
            try:
                lineage = LineageFacts.from_dict(merged)
            except ValueError as e:
                logger.warning(f"Rejected lineage update: {e}")
                abort(400, description=str(e))
            s.set_lineage(lineage)
        return jsonify({"lineage": s.lineage.to_dict(), "evaluation": _evaluation_payload()})

    @app.route("/api/documents", methods=["GET", "POST"])
    def api_documents():
        """
        List documents, or upload more.

        Upload expects multipart form data with one or more ``files`` parts.
        """
        s = _session()
        if request.method == "POST":
            uploads = [f for f in request.files.getlist("files") if f and f.filename]
            if not uploads:
                return jsonify({"error": "No files provided"}), 400

            selected = []
            for upload in uploads:
                content = upload.read()
                selected.append((upload.filename, len(content), content))

            added = s.add_files(selected)
            return jsonify({
                "added": [_document_payload(d) for d in added],
                "documents": [_document_payload(d) for d in s.documents],
                "evaluation": _evaluation_payload(),
            }), 201

        return jsonify({"documents": [_document_payload(d) for d in s.documents]})

    @app.route("/api/documents/<doc_id>", methods=["DELETE"])
    def api_remove_document(doc_id: str):
        s = _session()
        if not s.remove_document(doc_id):
            abort(404, description=f"No document with id {doc_id}")
        return jsonify({
            "ok": True,
            "documents": [_document_payload(d) for d in s.documents],
            "evaluation": _evaluation_payload(),
        })

    @app.route("/api/export")
    def api_export():
        """Download the JSON summary as an attachment."""
        s = _session()
        now = datetime.now(timezone.utc)
        filename = s.summary_filename(now)
        body = render_summary(s.summary(now), indent=config.export.indent)
        logger.info(f"Summary exported as {filename}")
        return Response(
            body,
            mimetype="application/json",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.route("/api/disclaimer", methods=["POST"])
    def api_disclaimer():
        incoming = _json_body()
        _session().accept_disclaimer(bool(incoming.get("accepted", False)))
        return jsonify({"accepted": _session().disclaimer_accepted})

    @app.route("/api/contact", methods=["POST"])
    def api_contact():
        """Request contact. Only allowed once the disclaimer is acknowledged."""
        try:
            message = _session().request_contact()
        except DisclaimerNotAccepted as e:
            logger.warning(f"Contact request refused: {e}")
            return jsonify({"error": str(e)}), 403
        return jsonify({"ok": True, "message": message})

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        _session().reset()
        return jsonify({"ok": True, "evaluation": _evaluation_payload()})

    # ── Error Handlers ──

    @app.errorhandler(400)
    @app.errorhandler(404)
    @app.errorhandler(413)
    def json_error(error):
        """JSON errors for the API, Flask's default pages elsewhere."""
        if not request.path.startswith("/api/"):
            return error
        return jsonify({"error": error.description}), error.code

    # ── Template Filters ──

    @app.template_filter("tier_color")
    def tier_color_filter(value):
        """Map a score tier to the progress bar color class."""
        colors = {
            "excellent": "bg-green-500",
            "good": "bg-emerald-500",
            "fair": "bg-amber-500",
            "low": "bg-red-500",
        }
        return colors.get(value, "bg-gray-500")

    @app.template_filter("filesize")
    def filesize_filter(value):
        """Bytes to '12.3 KB'."""
        try:
            return f"{int(value) / 1024:.1f} KB"
        except (ValueError, TypeError):
            return "?"

    @app.template_filter("category_name")
    def category_name_filter(value):
        try:
            return DocumentCategory(value).display_name
        except ValueError:
            return str(value)

    return app
