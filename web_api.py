from __future__ import annotations

from dotenv import load_dotenv

load_dotenv()

from pantry.app import create_app  # noqa: E402

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.config.server.port)
