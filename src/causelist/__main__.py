from causelist.cli import app

app(prog_name="causelist")
