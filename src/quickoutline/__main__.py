from quickoutline.cli import app

app(prog_name="quickoutline")
