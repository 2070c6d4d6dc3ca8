from vidscribe.cli.app import app

app()
