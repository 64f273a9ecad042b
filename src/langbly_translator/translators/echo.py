# SPDX-License-Identifier: Apache-2.0
"""Echo backend that returns the source text unchanged."""


class EchoTranslator:
    """Identity backend, useful for dry runs and tests.

    Attributes:
        name: Backend identifier ("echo").
    """

    @property
    def name(self) -> str:
        """Return backend name."""
        return "echo"

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        return text

    async def translate_batch(
        self,
        texts: list[str],
        source_lang: str,
        target_lang: str,
    ) -> list[str]:
        return list(texts)
