"""Message catalogs used to present groLang failures.

The evaluator only deals in error kinds and arguments. Turning those into
text is done here, with one catalog per language. `lang` selects the
active catalog; unknown languages fall back to English.
"""

from typing import Any, Dict, Sequence

DEFAULT_LANG = 'EN'

lang = DEFAULT_LANG

CATALOGS: Dict[str, Dict[str, str]] = {
    'EN': {
        'syntax_error': 'Syntax error {0}',
        'unknown_token': 'Unknown token {0}',
        'type_error': 'Declared type is :{0} whereas value is :{1}',
        'type_not_inferred': "Cannot infer the type of '{0}",
        'already_defined': "Variable '{0} is already defined",
        'not_defined': "Variable '{0} is not defined",
        'not_set': "Variable '{0} is unset",
        'not_mutable': "Variable '{0} is not mutable",
        'not_expected_type': "Variable '{0} expects :{1} whereas value is :{2}",
        'unknown_type': 'Unknown type :{0}',
        'unknown_class': 'Unknown class :{0}',
        'wrong_arguments': 'Function {0} expects ({1}) but got ({2})',
    },
    'FR': {
        'syntax_error': 'Erreur de syntaxe {0}',
        'unknown_token': 'Symbole inconnu {0}',
        'type_error': 'Le type déclaré est :{0} alors que la valeur est :{1}',
        'type_not_inferred': "Impossible de déduire le type de '{0}",
        'already_defined': "La variable '{0} est déjà définie",
        'not_defined': "La variable '{0} n'est pas définie",
        'not_set': "La variable '{0} n'a pas de valeur",
        'not_mutable': "La variable '{0} n'est pas modifiable",
        'not_expected_type': "La variable '{0} attend :{1} alors que la valeur est :{2}",
        'unknown_type': 'Type inconnu :{0}',
        'unknown_class': 'Classe inconnue :{0}',
        'wrong_arguments': 'La fonction {0} attend ({1}) mais a reçu ({2})',
    },
}


def set_language(language: str) -> None:
    global lang
    lang = language.upper() if language.upper() in CATALOGS else DEFAULT_LANG


def format_message(message_id: str, args: Sequence[Any] = (), language: str = None) -> str:
    """Format the message `message_id` of the active catalog with `args`."""
    catalog = CATALOGS.get(language or lang) or CATALOGS[DEFAULT_LANG]
    template = catalog.get(message_id)
    if template is None:
        return f"NO MESSAGE FOR {message_id}"
    try:
        return template.format(*args)
    except IndexError:
        # fewer arguments than placeholders
        return template + ' ' + ' '.join(str(a) for a in args)
