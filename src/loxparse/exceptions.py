class LoxError(Exception):
    pass
