"""Project root entry point for launching the web interface."""

from __future__ import annotations

import os


def main():
    from xlf_translator.web import create_app

    app = create_app()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 3000)), debug=False)


if __name__ == "__main__":
    main()
