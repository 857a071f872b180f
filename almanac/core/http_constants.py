"""Constantes HTTP partagées par l'API et le client FinMind.

Évite les valeurs magiques dans les routes, le mapping d'erreurs et les tests.
"""

HTTP_OK = 200
HTTP_NO_CONTENT = 204
HTTP_NOT_FOUND = 404
HTTP_UNPROCESSABLE_ENTITY = 422
HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_SERVICE_UNAVAILABLE = 503

# FinMind renvoie son propre statut dans le corps JSON
FINMIND_STATUS_OK = 200
