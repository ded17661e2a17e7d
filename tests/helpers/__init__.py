from .go_sources import CHI_MAIN, GIN_MAIN, GO_MOD, GORILLA_MAIN, HTTP_MAIN, MODULE_NAME, ROUTES_GO
from .project_builder import GoProjectBuilder

__all__ = [
    'CHI_MAIN', 'GIN_MAIN', 'GORILLA_MAIN', 'HTTP_MAIN', 'ROUTES_GO', 'GO_MOD', 'MODULE_NAME',
    'GoProjectBuilder'
]
