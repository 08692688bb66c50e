"""
Web application module for the RallySync rally timing planner.

This module contains the Flask web server that serves the HTML interface
and provides JSON API endpoints for setup, rally planning and reinforcement
timing.
"""
import os
from typing import Any, Dict, Optional

from flask import Flask, send_from_directory, jsonify, request
from loguru import logger

from ..models import ReinforcementRow, SetupData
from ..services import PlannerError, SetupError, ServiceFactory
from ..utils import APP_TITLE, DEFAULT_SETUP_FILE, DEFAULT_REINFORCEMENT_OFFSET_SECONDS


class WebAppState:
    """
    State holder for the web application.

    Uses the service factory for dependency injection.
    """

    def __init__(self, setup_path: str = DEFAULT_SETUP_FILE):
        self.service_factory = ServiceFactory(setup_path=setup_path)

        services = self.service_factory.create_complete_service_suite()
        self.setup_service = services['setup']
        self.planner_service = services['planner']
        self.reinforcement_service = services['reinforcement']
        self.persistence_service = services['persistence']

    def snapshot(self) -> Dict[str, Any]:
        """Full page state for the client."""
        setup = self.setup_service.setup
        state = self.planner_service.state
        manager = self.planner_service.command_manager
        return {
            "title": APP_TITLE,
            "setup": setup.to_json(),
            "setup_complete": setup.is_complete,
            "marches": [row.to_dict(setup) for row in state.marches],
            "plan": state.plan.to_dict() if state.plan is not None else None,
            "note": state.note,
            "can_undo": manager.can_undo(),
            "can_redo": manager.can_redo(),
        }


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def create_app(static_folder: str = ".", setup_path: Optional[str] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        static_folder: Directory to serve static files from
        setup_path: JSON file holding the setup snapshot

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__, static_folder=static_folder, static_url_path="")
    app_state = WebAppState(setup_path or DEFAULT_SETUP_FILE)
    app.config["APP_STATE"] = app_state

    @app.route("/")
    def index():
        """Serve the main HTML interface."""
        response = send_from_directory(static_folder, "index.html")
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    # ==================== API Endpoints ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Get setup, planner rows and the current plan."""
        try:
            return jsonify({"success": True, **app_state.snapshot()})
        except Exception as e:
            logger.exception("State snapshot failed")
            return jsonify({"success": False, "error": str(e)}), 500

    # -------------------- Setup -------------------- #

    @app.route("/api/setup", methods=["GET"])
    def get_setup():
        return jsonify({"success": True, "setup": app_state.setup_service.setup.to_json()})

    @app.route("/api/setup", methods=["PUT"])
    def replace_setup():
        """Replace the whole setup snapshot (import)."""
        try:
            setup = SetupData.from_json(_json_body().get("setup"))
            app_state.setup_service.replace(setup)
            return jsonify({"success": True, "setup": setup.to_json()})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/setup/target", methods=["PUT"])
    def set_target():
        label = str(_json_body().get("target_label") or "")
        setup = app_state.setup_service.set_target_label(label)
        return jsonify({"success": True, "setup": setup.to_json()})

    @app.route("/api/setup/members", methods=["POST"])
    def add_member():
        data = _json_body()
        member = app_state.setup_service.add_member(
            name=str(data.get("name") or ""),
            minutes=str(data.get("m", "0")),
            seconds=str(data.get("s", "0")),
        )
        return jsonify({"success": True, "member": member.to_dict()}), 201

    @app.route("/api/setup/members/<member_id>", methods=["PUT"])
    def update_member(member_id: str):
        """Update name, minutes (m) and/or seconds (s) of a member."""
        data = _json_body()
        fields = [f for f in ("name", "m", "s") if f in data]
        if not fields:
            return jsonify({"success": False, "error": "No member fields provided"}), 400
        try:
            member = None
            for field_name in fields:
                member = app_state.setup_service.update_member(member_id, field_name, data[field_name])
            return jsonify({"success": True, "member": member.to_dict()})
        except SetupError as e:
            return jsonify({"success": False, "error": str(e)}), 404

    @app.route("/api/setup/members/<member_id>", methods=["DELETE"])
    def delete_member(member_id: str):
        try:
            app_state.setup_service.remove_member(member_id)
            return jsonify({"success": True, "message": "Member removed"})
        except SetupError as e:
            return jsonify({"success": False, "error": str(e)}), 404

    # -------------------- Rally planner -------------------- #

    @app.route("/api/planner/marches", methods=["POST"])
    def add_march():
        row = app_state.planner_service.add_march(str(_json_body().get("leader") or ""))
        return jsonify({"success": True, "march": row.to_dict(app_state.setup_service.setup)}), 201

    @app.route("/api/planner/marches/<row_id>", methods=["PUT"])
    def update_march(row_id: str):
        """Set leader, custom minutes/seconds, edit mode, or clear the custom time."""
        data = _json_body()
        if "editing" in data and not isinstance(data["editing"], bool):
            return jsonify({"success": False, "error": "editing must be true or false"}), 400
        planner = app_state.planner_service
        try:
            if "leader" in data:
                planner.update_leader(row_id, str(data.get("leader") or ""))
            if data.get("clear_custom"):
                planner.clear_custom(row_id)
            elif "custom_m" in data or "custom_s" in data:
                minutes = data.get("custom_m")
                seconds = data.get("custom_s")
                planner.set_custom(
                    row_id,
                    None if minutes is None else str(minutes),
                    None if seconds is None else str(seconds),
                )
            if "editing" in data:
                planner.toggle_edit(row_id, data["editing"])
            return jsonify({"success": True, **app_state.snapshot()})
        except PlannerError as e:
            return jsonify({"success": False, "error": str(e)}), 404

    @app.route("/api/planner/marches/<row_id>", methods=["DELETE"])
    def delete_march(row_id: str):
        try:
            removed = app_state.planner_service.remove_march(row_id)
            if not removed:
                return jsonify({"success": False, "error": "At least one march row is required"}), 400
            return jsonify({"success": True, "message": "March removed"})
        except PlannerError as e:
            return jsonify({"success": False, "error": str(e)}), 404

    @app.route("/api/planner/marches/<row_id>/move", methods=["POST"])
    def move_march(row_id: str):
        direction = str(_json_body().get("direction") or "")
        planner = app_state.planner_service
        if planner.state.index_of(row_id) < 0:
            return jsonify({"success": False, "error": f"March row not found: {row_id}"}), 404
        try:
            moved = planner.move(row_id, direction)
            return jsonify({"success": True, "moved": moved, **app_state.snapshot()})
        except PlannerError as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/planner/calculate", methods=["POST"])
    def calculate_plan():
        """Calculate the plan from now, or for a fixed target arrival time."""
        target_time = _json_body().get("target_time")
        if target_time is not None and not isinstance(target_time, str):
            return jsonify({"success": False, "error": "target_time must be an HH:MM[:SS] string"}), 400
        target_time = (target_time or "").strip() or None
        try:
            state = app_state.planner_service.calculate(target_clock=target_time)
            if state.plan is None or not state.plan.has_plan:
                return jsonify({
                    "success": False,
                    "note": state.note,
                    "plan": state.plan.to_dict() if state.plan is not None else None,
                }), 400
            return jsonify({"success": True, "note": state.note, "plan": state.plan.to_dict()})
        except Exception as e:
            logger.exception("Plan calculation failed")
            return jsonify({"success": False, "error": str(e)}), 500

    @app.route("/api/planner/reset", methods=["POST"])
    def reset_planner():
        app_state.planner_service.reset()
        return jsonify({"success": True, **app_state.snapshot()})

    @app.route("/api/planner/messages", methods=["GET"])
    def get_messages():
        """Clipboard-ready messages and verification for the current plan."""
        planner = app_state.planner_service
        plan = planner.state.plan
        rows = plan.rows if plan is not None else ()
        return jsonify({
            "success": True,
            "messages": [planner.message_service.message_for(row) for row in rows],
            "verification": planner.message_service.verification_service.render(rows),
            "clipboard": planner.clipboard_text(),
        })

    # -------------------- History -------------------- #

    @app.route("/api/undo", methods=["POST"])
    def undo_action():
        """Undo the last planner action using Command pattern."""
        if app_state.planner_service.undo():
            return jsonify({"success": True, "message": "Action undone"})
        return jsonify({"success": False, "message": "Nothing to undo"}), 400

    @app.route("/api/redo", methods=["POST"])
    def redo_action():
        """Redo the next planner action using Command pattern."""
        try:
            if app_state.planner_service.redo():
                return jsonify({"success": True, "message": "Action redone"})
            return jsonify({"success": False, "message": "Nothing to redo"}), 400
        except PlannerError as e:
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/api/command-history", methods=["GET"])
    def get_command_history():
        """Get command history for UI display."""
        manager = app_state.planner_service.command_manager
        return jsonify({
            "success": True,
            "history": manager.get_command_history(),
            "can_undo": manager.can_undo(),
            "can_redo": manager.can_redo()
        })

    # -------------------- Reinforcements -------------------- #

    @app.route("/api/reinforcements/calculate", methods=["POST"])
    def calculate_reinforcements():
        """
        Compute reinforcement send times.

        Rows that name a setup member but carry no march time get the
        member's stored march time.
        """
        data = _json_body()
        setup = app_state.setup_service.setup
        service = app_state.reinforcement_service

        raw_rows = data.get("rows") or []
        if not isinstance(raw_rows, list):
            return jsonify({"success": False, "error": "rows must be a list"}), 400

        rows = []
        for item in raw_rows:
            if not isinstance(item, dict):
                return jsonify({"success": False, "error": "Each row must be an object"}), 400
            row = ReinforcementRow.from_dict(item)
            if not any(key in item for key in ("m", "s", "minutes", "seconds")):
                row = service.select_leader(row, row.leader, setup)
            rows.append(row)

        try:
            result = service.calculate(
                str(data.get("rally_m", "0")),
                str(data.get("rally_s", "0")),
                str(data.get("opp_march_m", "0")),
                str(data.get("opp_march_s", "0")),
                rows,
                offset_seconds=data.get("offset", DEFAULT_REINFORCEMENT_OFFSET_SECONDS),
            )
            if not result.has_sends:
                return jsonify({"success": False, "note": result.note, "result": result.to_dict()}), 400
            return jsonify({"success": True, "result": result.to_dict()})
        except Exception as e:
            logger.exception("Reinforcement calculation failed")
            return jsonify({"success": False, "error": str(e)}), 500

    return app


def run_web_app(
    host: str = "127.0.0.1",
    port: int = 7122,
    static_folder: str = ".",
    setup_path: Optional[str] = None,
) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        static_folder: Directory containing static files (HTML, CSS, JS)
        setup_path: JSON file holding the setup snapshot
    """
    app = create_app(static_folder, setup_path)
    logger.info("Starting web app", host=host, port=port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    # Default to serving files from the project root when run directly
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    run_web_app(static_folder=project_root)
