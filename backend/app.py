# module backend.app
from backend.app_setup.factory import create_app

# App globale (le client PagoPar est construit au démarrage, dans le lifespan)
app = create_app()
