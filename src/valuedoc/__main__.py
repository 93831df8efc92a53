from pathlib import Path

from dotenv import load_dotenv

from .cli import app

if __name__ == "__main__":
    load_dotenv(Path.cwd() / ".env", override=True)
    app()
