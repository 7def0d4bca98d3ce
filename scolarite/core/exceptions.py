class PortalError(Exception):
    """Base error carrying a message that can be shown to the user as-is."""

    default_message = "Une erreur est survenue."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(PortalError):
    default_message = "Ressource introuvable."


class Duplicate(PortalError):
    default_message = "Cet enregistrement existe déjà."


class IllegalTransition(PortalError):
    default_message = "Action impossible pour le statut actuel."


class DocumentNotReady(PortalError):
    default_message = "Vous pouvez télécharger le PDF uniquement après approbation de la demande."


class InvalidInput(PortalError):
    default_message = "Données invalides."
