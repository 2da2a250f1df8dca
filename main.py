from common_sense.application import create_app

app = create_app()
