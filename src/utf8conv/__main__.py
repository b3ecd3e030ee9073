from .cli import app

app(prog_name="utf8conv")
