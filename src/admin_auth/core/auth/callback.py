"""Provider callback URLs."""

CALLBACK_URL_TEMPLATE = "/admin/connect/{{provider}}/callback"


def get_provider_callback_url(provider_name: str) -> str:
    """Callback path an identity provider redirects back to.

    The name is substituted as-is, without validation or URL escaping.

    Args:
        provider_name: Provider uid (e.g., 'google')

    Returns:
        Path such as /admin/connect/google/callback
    """
    return CALLBACK_URL_TEMPLATE.replace("{{provider}}", provider_name)
