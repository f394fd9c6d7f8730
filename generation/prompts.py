"""
Fixed prompts and markers shared by the spec and code stages
"""

CODE_REGION_OPENER = "```html"
CODE_REGION_CLOSER = "```"

SPEC_FROM_VIDEO_PROMPT = """You are a pedagogist and product designer with deep expertise in crafting engaging learning experiences for children via interactive web apps.

**TASK**: Watch the provided video and write a spec for an interactive web app (a small learning game) that reinforces the key ideas of the video.

**YOUR GUIDELINES**:

1. **Watch Carefully**: Identify the one or two core ideas the video teaches and who it is made for.

2. **Design the Game**:
   - The game must be playable with a mouse or a finger, no keyboard required
   - Keep the rules simple enough to explain in two sentences
   - Give immediate, encouraging feedback for right and wrong answers
   - Use bright visuals built from shapes, emoji and text only (no external assets)
   - Prefer short rounds with a clear ending and a way to play again

3. **Write the Spec**:
   - Describe the goal of the game and how it connects to the video
   - Describe every screen, the interactions on it and what happens on success or failure
   - Keep it concrete: name the items, the numbers and the messages shown to the player
   - Do not write any code

**OUTPUT FORMAT (Strict)**
Return ONLY valid JSON matching exactly this structure (no extra text, no backticks):
{
  "spec": "string"
}
"""

SPEC_ADDENDUM = f"""

The app must be fully responsive and function properly on both desktop and mobile. Provide the code as a single, self-contained HTML document. All styles and scripts must be inline. Do not load any external libraries, fonts or images.

In the result, encase the code between "{CODE_REGION_OPENER}" and "{CODE_REGION_CLOSER}" for easy parsing."""


def with_addendum(spec: str) -> str:
    """Append the fixed addendum consumed by the code stage"""
    return spec + SPEC_ADDENDUM
