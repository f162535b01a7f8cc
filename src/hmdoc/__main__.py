from hmdoc.cli import app

app()
