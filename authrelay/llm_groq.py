import requests

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


def groq_answer(api_key: str, model: str, system_prompt: str, message: str, timeout: float = 60.0) -> str:
    if not api_key:
        raise RuntimeError("Missing GROQ_API_KEY")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    payload = {
        "model": model,
        "temperature": 0.5,
        "max_tokens": 900,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": message},
        ],
    }

    r = requests.post(GROQ_URL, headers=headers, json=payload, timeout=timeout)

    if r.status_code != 200:
        raise RuntimeError(f"Groq API error: {r.status_code} - {r.text}")

    data = r.json()
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise RuntimeError(f"Unexpected Groq response format: {data}")
    return (content or "").strip()


def make_groq_generator(api_key: str, model: str, timeout: float = 60.0):
    """Bind credentials so the dispatcher only sees `(system_prompt, message) -> text`."""
    def generate(system_prompt: str, message: str) -> str:
        return groq_answer(api_key, model, system_prompt, message, timeout=timeout)
    return generate
