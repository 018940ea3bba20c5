# cyclewatch/__main__.py
# Allow `python -m cyclewatch`

from .cli import app

if __name__ == "__main__":
    app()
