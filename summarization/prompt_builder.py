"""Prompt builder for clinical note summaries."""

_SUMMARY_TEMPLATE = """\
Analiza la siguiente nota clínica y genera un resumen ejecutivo de máximo {max_words} palabras, enfocándote en:
1. Diagnóstico principal
2. Síntomas clave
3. Tratamiento recomendado
4. Seguimiento necesario

Nota clínica:
{content}

Resumen:"""


class SummaryPromptBuilder:
    """Builds the fixed summary prompt for one cleaned note."""

    def __init__(self, max_words: int = 150) -> None:
        self._max_words = max_words

    def build_prompt(self, content: str) -> str:
        """Render the summary prompt.

        Args:
            content: Cleaned note content.

        Returns:
            A fully formatted prompt string ready for LLM consumption.
        """
        return _SUMMARY_TEMPLATE.format(max_words=self._max_words, content=content.strip())
