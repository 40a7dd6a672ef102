import os
import logging
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

# Import database query functions
from data_access import (
    list_arcades,
    record_score,
    get_arcade_leaderboard,
    get_global_leaderboard
)
from services.arcades import get_arcade, ensure_arcade_row, ARCADE_HREFS
from services.submissions import (
    ScoreValidationError,
    validate_submission,
    clamp_limit,
    LEADERBOARD_LIMIT_DEFAULT,
    LEADERBOARD_LIMIT_MAX,
    GLOBAL_LEADERBOARD_LIMIT_MAX
)

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})


def _unknown_game(game):
    return jsonify({"error": f"Game '{game}' not found"}), 404


@app.route("/api/games/<game>/leaderboard", methods=["GET"])
def get_game_leaderboard(game):
    """
    Ranked scores for one arcade game.

    Query parameters:
    - limit: number of entries (default 10, max 25)
    """
    arcade = get_arcade(game)
    if arcade is None:
        return _unknown_game(game)

    try:
        limit = clamp_limit(
            request.args.get("limit"),
            default=LEADERBOARD_LIMIT_DEFAULT,
            maximum=LEADERBOARD_LIMIT_MAX
        )
        row = ensure_arcade_row(arcade)
        entries = get_arcade_leaderboard(row['id'], limit=limit)
        return jsonify({"entries": entries})

    except Exception as error:
        logging.error(f"Error fetching {game} leaderboard: {error}")
        return jsonify({"error": f"Failed to load {arcade.key} leaderboard"}), 500


@app.route("/api/games/<game>/score", methods=["POST"])
def submit_game_score(game):
    """
    Record a finished run.

    Body: {"username": str, "score": int, "completion_time_seconds": int | null}
    """
    arcade = get_arcade(game)
    if arcade is None:
        return _unknown_game(game)

    try:
        submission = validate_submission(request.get_json(silent=True))
    except ScoreValidationError as error:
        return jsonify({"error": str(error)}), 400

    try:
        row = ensure_arcade_row(arcade)
        stored = record_score(
            row['id'],
            submission['username'],
            submission['score'],
            submission['completion_time_seconds']
        )
        entry = {
            "username": stored.get('username', submission['username']),
            "score": stored.get('score', submission['score']),
            "completion_time_seconds": stored.get(
                'completion_time_seconds', submission['completion_time_seconds']
            ),
            "rank": None,
            "created_at": stored.get('created_at'),
        }
        label = arcade.key.capitalize()
        logging.info(f"Recorded {arcade.key} score {entry['score']} for {entry['username']}")
        return jsonify({"message": f"{label} score recorded.", "entry": entry}), 201

    except Exception as error:
        logging.error(f"Error saving {game} score: {error}")
        return jsonify({"error": f"Failed to save {arcade.key} score"}), 500


@app.route("/api/leaderboard", methods=["GET"])
def get_leaderboard():
    """
    Per-player totals across every arcade.

    Query parameters:
    - limit: number of players (default 10, max 50)
    """
    try:
        limit = clamp_limit(
            request.args.get("limit"),
            default=LEADERBOARD_LIMIT_DEFAULT,
            maximum=GLOBAL_LEADERBOARD_LIMIT_MAX
        )
        return jsonify({"entries": get_global_leaderboard(limit=limit)})

    except Exception as error:
        logging.error(f"Error fetching global leaderboard: {error}")
        return jsonify({"error": "Failed to load leaderboard"}), 500


@app.route("/api/arcades", methods=["GET"])
def get_arcades():
    """
    Arcade catalogue.

    Query parameters:
    - category: optional filter ('uncategorized' for rows without one)
    """
    try:
        category = (request.args.get("category") or "").strip() or None
        arcades = []
        for row in list_arcades(category=category):
            created_at = row.get('created_at')
            arcades.append({
                **row,
                "created_at": created_at.isoformat() if hasattr(created_at, 'isoformat') else created_at,
                "href": ARCADE_HREFS.get(row.get('slug')),
            })
        return jsonify({"arcades": arcades})

    except Exception as error:
        logging.error(f"Error fetching arcades: {error}")
        return jsonify({"error": "Failed to load arcades"}), 500


if __name__ == "__main__":
    app.run(debug=os.getenv("FLASK_DEBUG"))
