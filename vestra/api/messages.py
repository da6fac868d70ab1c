"""
Localized user-facing messages.

Domain exceptions carry a message key; this module resolves keys to text
for the locale negotiated from the request's Accept-Language header.
"""

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "registration_fields_required": "Email, password and password confirmation are required",
        "email_invalid": "Invalid email format",
        "password_mismatch": "Passwords do not match",
        "password_too_short": "Password must be at least 8 characters long",
        "confirmation_fields_required": "Email and confirmation code are required",
        "login_fields_required": "Email and password are required",
        "invalid_request": "Invalid request body",
        "email_already_registered": "This email is already registered",
        "invalid_confirmation_code": "Invalid confirmation code",
        "confirmation_code_expired": (
            "The confirmation code has expired. Register again to receive a new code."
        ),
        "pending_registration_not_found": (
            "Registration data not found. Please start the registration again."
        ),
        "invalid_credentials": "Incorrect email or password",
        "account_disabled": "Account disabled",
        "invalid_session": "Invalid or expired session",
        "email_delivery_failed": "Failed to send confirmation email. Please try again.",
        "store_unavailable": "Database connection error. Please try again later.",
        "unexpected_error": "An unexpected error occurred",
        "code_sent": (
            "Confirmation email sent! Check your inbox and enter the 6-digit code "
            "to complete your registration."
        ),
        "account_created": "Email confirmed successfully! Your account has been created.",
        "login_succeeded": "Logged in successfully",
    },
    "pt-BR": {
        "registration_fields_required": "E-mail, senha e confirmação de senha são obrigatórios",
        "email_invalid": "Formato de e-mail inválido",
        "password_mismatch": "As senhas não coincidem",
        "password_too_short": "A senha deve ter pelo menos 8 caracteres",
        "confirmation_fields_required": "E-mail e código de confirmação são obrigatórios",
        "login_fields_required": "E-mail e senha são obrigatórios",
        "invalid_request": "Corpo da requisição inválido",
        "email_already_registered": "Este e-mail já está cadastrado",
        "invalid_confirmation_code": "Código de confirmação inválido",
        "confirmation_code_expired": (
            "O código de confirmação expirou. "
            "Faça o cadastro novamente para receber um novo código."
        ),
        "pending_registration_not_found": (
            "Dados do cadastro não encontrados. Inicie o processo de cadastro novamente."
        ),
        "invalid_credentials": "E-mail ou senha incorretos",
        "account_disabled": "Conta desativada",
        "invalid_session": "Sessão inválida ou expirada",
        "email_delivery_failed": "Falha ao enviar e-mail de confirmação. Tente novamente.",
        "store_unavailable": "Erro de conexão com o banco de dados. Tente novamente mais tarde.",
        "unexpected_error": "Ocorreu um erro inesperado",
        "code_sent": (
            "E-mail de confirmação enviado! Verifique sua caixa de entrada e insira "
            "o código de 6 dígitos para concluir o cadastro."
        ),
        "account_created": "E-mail confirmado com sucesso! Sua conta foi criada.",
        "login_succeeded": "Login realizado com sucesso",
    },
}


def negotiate_locale(accept_language: str | None, default: str = DEFAULT_LOCALE) -> str:
    """
    Pick the first supported locale from an Accept-Language header.

    Matching ignores quality weights beyond their order and falls back to
    the primary language tag ("pt-PT" selects "pt-BR").
    """
    if default not in MESSAGES:
        default = DEFAULT_LOCALE
    if not accept_language:
        return default

    for part in accept_language.split(","):
        tag = part.split(";")[0].strip().lower()
        if not tag:
            continue
        for locale in MESSAGES:
            if locale.lower() == tag:
                return locale
        primary = tag.split("-")[0]
        for locale in MESSAGES:
            if locale.lower().split("-")[0] == primary:
                return locale
    return default


def translate(key: str, locale: str) -> str:
    catalog = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    return catalog.get(key) or MESSAGES[DEFAULT_LOCALE][key]
