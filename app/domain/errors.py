# app/domain/errors.py


class TrackingError(Exception):
    """Bazowy blad domeny cart tracking."""


class InvalidInputError(TrackingError, ValueError):
    """Niepoprawne dane wejsciowe (ujemna cena, ilosc < 1, prog <= 0 itd.)."""


class NotFoundError(TrackingError, LookupError):
    pass


class FeatureDisabledError(TrackingError, PermissionError):
    """Sklep nie ma wlaczonej funkcji premium."""


class SessionConflictError(TrackingError):
    """
    Rownolegly insert aktywnej sesji dla tego samego klucza
    (store, customer, session). Warunek do ponowienia, nie blad krytyczny.
    """
