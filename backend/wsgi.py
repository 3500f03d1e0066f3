from venuehub import create_app

app = create_app()
