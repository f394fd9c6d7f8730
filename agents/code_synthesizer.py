from agents.base import BaseSynthesizer
from generation.prompts import CODE_REGION_CLOSER, CODE_REGION_OPENER
from generation.response_extractor import parse_delimited


class CodeSynthesizer(BaseSynthesizer):
    """
    Code Synthesizer: Turns a spec into a self-contained HTML document using
    sentinel-marker extraction. The result is not sanitized; render it sandboxed.
    """

    async def synthesize(self, spec: str) -> str:
        """Generate code for a spec, using the spec text verbatim as the prompt"""
        self.logger.info(f"Generating code from spec ({len(spec)} chars)")

        response = await self._call_llm(spec)
        code = parse_delimited(response, CODE_REGION_OPENER, CODE_REGION_CLOSER)

        self.logger.info(f"Extracted code ({len(code)} chars)")
        return code
