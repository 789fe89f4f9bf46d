SYSTEM_PROMPT = "Return only valid JSON. Do not include markdown or extra text."


def build_extract_prompt(text: str) -> str:
    return (
        "You extract product specification data from quote requests for custom packaging\n"
        "(mylor bags, stand up pouches, flat pouches, labels, folding cartons, ...).\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema (use null or [] when something is not mentioned):\n"
        "{\n"
        "  \"category\": \"string\",\n"
        "  \"product_type\": \"string\",\n"
        "  \"quantities\": [number, ...],\n"
        "  \"dimensions\": {\"width\": number, \"height\": number, \"gusset\": number},\n"
        "  \"materials\": [\"string\", ...],\n"
        "  \"finishes\": [\"string\", ...],\n"
        "  \"confidence\": {\"category\": number, \"product_type\": number, \"quantities\": number,\n"
        "                 \"dimensions\": number, \"materials\": number, \"finishes\": number}\n"
        "}\n"
        "Rules:\n"
        "  - confidence values are 0-1 and say how sure you are that the user actually asked for that field.\n"
        "  - Only extract what the user wrote. Never guess a material or finish that was not mentioned.\n"
        "  - \"5k\" = [5000], \"2.5k\" = [2500], \"1000, 2000, 4000\" = [1000, 2000, 4000].\n"
        "  - \"4x5\" or \"4*5 inches\" = width 4, height 5; \"4x6x2\" adds gusset 2. Dimensions are in inches.\n"
        "  - Keep a material specification as written: \"PET + White PE\" is one material.\n"
        "  - \"Matt + spot uv\" = [\"matte\", \"spot UV\"].\n"
        "  - \"standup pouches\" = category \"mylor bag\", product_type \"stand up pouch\".\n"
        "\n"
        f"Message: {text!r}\n"
    )
