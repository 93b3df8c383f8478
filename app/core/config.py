from os import getenv

class Settings:
    JWT_SECRET = getenv("JWT_SECRET", "dev-secret-change-in-prod")
    JWT_EXPIRE_MIN = int(getenv("JWT_EXPIRE_MIN", "60"))  # durée de vie du token en minutes
    NOTIFIER_MAX_PENDING = int(getenv("NOTIFIER_MAX_PENDING", "100"))  # events en attente par abonné
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    GRAPHIQL = getenv("GRAPHIQL", "1") == "1"

settings = Settings()
