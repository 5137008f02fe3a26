def brief_prompt(word: str) -> str:
    return f"英単語「{word}」の意味を日本語で説明してください。"


def detailed_prompt(word: str) -> str:
    """
    単語カードの詳細表示用プロンプト
    """
    return (
        f"英単語「{word}」について、日本語で詳しく説明してください。\n"
        f"次の項目を含めてください：\n"
        f"- 品詞\n"
        f"- 主な意味（複数ある場合はすべて）\n"
        f"- 例文を2〜3個（英文と日本語訳）\n"
        f"- 類義語・関連語\n"
        f"前置きや締めの言葉は不要です。"
    )


def build_prompt(word: str, detailed: bool = False) -> str:
    return detailed_prompt(word) if detailed else brief_prompt(word)
