from datetime import datetime

from flask import Blueprint, jsonify, g

from healthsync.schemas.chat import AskSchema
from healthsync.services import chat as chat_service
from healthsync.utils.decorators import login_required
from healthsync.utils.helpers import get_json_body, get_page_args, paginated

chat_bp = Blueprint("chat", __name__)


@chat_bp.route("/ask", methods=["POST"])
@login_required
def ask():
    data = AskSchema().load(get_json_body())
    return jsonify(chat_service.ask(g.current_user.id, data["question"]))


@chat_bp.route("/history", methods=["GET"])
@login_required
def history():
    page, page_size = get_page_args(default_size=20)
    pagination, messages = chat_service.history(g.current_user.id, page, page_size)
    return jsonify(paginated(pagination, [m.to_dict() for m in messages]))


@chat_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "healthy", "timestamp": datetime.utcnow().isoformat()})
