"""Console-based magic-link delivery for local development.

Prints the sign-in link to stdout so developers can click it directly.
"""

from gumboard.core.auth.delivery import MagicLinkMessage, MagicLinkSender


class ConsoleMagicLinkSender:
    """Console-based magic-link delivery.

    Instead of sending an email, prints the link to the console. This is
    useful for:
    - Local development without an email provider
    - Testing the sign-in flow end to end
    """

    async def send_magic_link(self, message: MagicLinkMessage) -> bool:
        """Print the sign-in link to the console.

        Args:
            message: Recipient and link.

        Returns:
            True (console printing always succeeds).
        """
        # Print with clear formatting so it's visible in logs
        print("\n" + "=" * 70, flush=True)
        print("[MAGIC LINK] Sign-in link generated for dev mode", flush=True)
        print(f"  Email: {message.to}", flush=True)
        print(f"  Link:  {message.link}", flush=True)
        print("=" * 70 + "\n", flush=True)
        return True


# Verify we implement the protocol
_sender: MagicLinkSender = ConsoleMagicLinkSender()
