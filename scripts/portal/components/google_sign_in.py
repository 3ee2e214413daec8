"""
Google Identity Services sign-in button for Streamlit.

The button runs inside a components.html iframe. When Google returns a
credential, the script reloads the top-level page with the token in the
`credential` query parameter, where the login page picks it up.
"""

from __future__ import annotations

import json
from typing import Optional

import streamlit as st
import streamlit.components.v1 as components

CREDENTIAL_PARAM = "credential"
_DISABLE_FLAG = "_gis_disable_auto_select"
# Shown when the component iframe may not navigate the top-level page
NAVIGATION_BLOCKED_MESSAGE = "Sign-in could not reload the portal. Open the portal in its own browser tab and try again."


def build_sign_in_html(client_id: str, disable_auto_select: bool = False, height: int = 60) -> str:
    """
    Build standalone HTML for the Google sign-in button.

    Args:
        client_id: OAuth client id of the portal
        disable_auto_select: Emit disableAutoSelect() before rendering (after logout)
        height: Component height in pixels

    Returns:
        HTML string loading the GIS client library
    """
    return f"""
<!DOCTYPE html>
<html>
<head>
    <script src="https://accounts.google.com/gsi/client" async defer></script>
    <style>
        body {{ margin: 0; padding: 0; display: flex; justify-content: center; height: {height}px; }}
    </style>
</head>
<body>
    <div id="gis-button"></div>
    <script>
        function handleCredential(response) {{
            try {{
                const target = window.top || window.parent;
                const url = new URL(target.location.href);
                url.searchParams.set({json.dumps(CREDENTIAL_PARAM)}, response.credential);
                target.location.href = url.toString();
            }} catch (err) {{
                document.getElementById("gis-button").textContent = {json.dumps(NAVIGATION_BLOCKED_MESSAGE)};
            }}
        }}
        window.onload = function () {{
            if ({json.dumps(disable_auto_select)}) {{
                google.accounts.id.disableAutoSelect();
            }}
            google.accounts.id.initialize({{
                client_id: {json.dumps(client_id)},
                callback: handleCredential,
                auto_select: false
            }});
            google.accounts.id.renderButton(
                document.getElementById("gis-button"),
                {{ theme: "outline", size: "large", text: "signin_with", shape: "pill" }}
            );
        }};
    </script>
</body>
</html>
"""


class GoogleIdentityWidget:
    """Identity widget handle; also satisfies the logout hook of the session store."""

    def __init__(self, client_id: str):
        self.client_id = client_id

    def disable_auto_select(self) -> None:
        # Consumed by the next render of the button
        st.session_state[_DISABLE_FLAG] = True

    def render(self, height: int = 60) -> None:
        disable = bool(st.session_state.pop(_DISABLE_FLAG, False))
        components.html(build_sign_in_html(self.client_id, disable, height), height=height)

    @staticmethod
    def pop_credential() -> Optional[str]:
        """Take the credential handed back by the button, removing it from the URL."""
        value = st.query_params.get(CREDENTIAL_PARAM)
        if not value:
            return None
        del st.query_params[CREDENTIAL_PARAM]
        return str(value)
