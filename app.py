import os

from backend import create_app


# -------------------------------------------------------------------------
# APP (gunicorn app:app)
# -------------------------------------------------------------------------
app = create_app()


# -------------------------------------------------------------------------
# MAIN
# -------------------------------------------------------------------------
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 3001)), debug=False)
