#setup: pip install -e .[test]
#setup: flask --app mortgage_compare.wsgi run --port 5000 --debug

from __future__ import annotations

from mortgage_compare.app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(port=5000, debug=True)
