"""Deterministic template content used when no upstream credential is set.

Every builder takes the stripped prompt ``p``, its heading form ``title``,
the tone and the length, and returns markdown-ish plain text. ``length``
only switches sections on and off; ``tone`` only changes wording.
"""

import re

from ..utils import capitalize_first


def _blog(p: str, title: str, tone: str, length: str) -> str:
    middle = ""
    if length != "short":
        middle = f"""
## Why {title} Matters Now

The move toward more efficient systems has made {p} a top priority. Teams are turning to it to solve hard problems, and they keep citing better efficiency and better outcomes as the main reasons.

### Key Strategies for Success

1. **Foundational Knowledge**: Get the basics right before going deep.
2. **Consistent Practice**: Getting good at {p} takes regular, deliberate application.
3. **Continuous Learning**: The field keeps moving, so stay curious.
"""
    if length == "long":
        outlook = (
            f"By staying proactive you can put yourself at the front of what comes next. "
            f"The room for measurable results with {p} is large for anyone who sticks with the principles above."
        )
    else:
        outlook = "It marks a real shift in how we approach everyday challenges."

    return f"""# The Complete Guide to {title}

Few topics have moved as quickly as {p}. Whether you want a smoother workflow or just want to stay ahead of the curve, understanding the core ideas behind {p} is the first step.
{middle}
## Future Outlook

The impact of {p} is only expected to grow. {outlook}

Conclusion: embracing {p} is not just a choice, it is a strategic move."""


def _social(p: str, title: str, tone: str, length: str) -> str:
    if tone == "humorous":
        opening = f"I used to think {p} was a myth, but here we are! 😂"
    else:
        opening = f"We are seeing a big shift in how {p} gets used."
    middle = ""
    if length != "short":
        middle = f"""
It is not just theory, it is real-world impact. Beginner or pro, there is always something new to learn about {p}.

🔥 Key Takeaways:
- Efficiency is key ⚡
- Stay ahead of the trend 📈
- Build for the future 🚀
"""
    hashtag = re.sub(r"\s+", "", p)
    return f"""✨ Unleashing the Power of {title}! ✨

{opening}
{middle}
What are your thoughts on {p}? Let's discuss below! 👇

#{hashtag} #Innovation #FutureTech #AIContent #GrowthMindset"""


def _email(p: str, title: str, tone: str, length: str) -> str:
    middle = ""
    if length != "short":
        middle = f"""
Over the past few months the numbers around {p} have pointed steadily toward higher efficiency and better use of resources. Here is how we could put that to work:

- **Phase 1**: Audit the existing {p} workflows.
- **Phase 2**: Roll out the new, optimized process.
- **Phase 3**: Measure the results and iterate.
"""
    if length == "long":
        follow_up = (
            "I'd love to set up a short call next Tuesday to walk you through the details. "
            "I have a full report ready covering the expected return and the long-term advantages of this approach."
        )
    else:
        follow_up = "Let me know if you would like to see the full breakdown."
    greeting = "Dear colleague," if tone == "formal" else "Hi there,"

    return f"""Subject: Getting More Out of {title}

{greeting}

I hope your week is going well. I have been researching {p} and I think some of what I found could help your current projects directly.
{middle}
{follow_up}

Best regards,

[Your Name]
Content Strategist"""


def _product(p: str, title: str, tone: str, length: str) -> str:
    middle = ""
    if length != "short":
        middle = f"""
### Why Choose Our {p} Solution?

Unlike traditional tools, our take on {p} starts from what modern teams actually need. We removed the friction that usually slows you down, so output goes up without quality going down.
"""
        if length == "long":
            middle += f"""
Our commitment to {p} is backed by years of research and development. We talked with hundreds of practitioners to make sure every feature we ship solves a real problem, from the first setup to daily operations.
"""
    pitch = "Meet" if tone == "casual" else "Introducing"
    return f"""## {pitch} the All-New {title} Solution

Get the next generation of performance with our {p} toolkit. Built for professionals who expect the best, it pairs solid engineering with an interface that stays out of your way.

**Key Features:**
- **Dynamic Performance**: Tuned for real {p} scenarios.
- **Intuitive Interface**: Less time configuring, more time doing.
- **Robust Integration**: Works with the stack you already have.
{middle}
Elevate your game today."""


_BUILDERS = {
    "blog": _blog,
    "social": _social,
    "email": _email,
    "product": _product,
}


def generate_fallback_content(content_type: str, prompt: str, tone: str, length: str) -> str:
    p = prompt.strip()
    builder = _BUILDERS.get(content_type)
    if builder is None:
        return f"High-quality insights regarding {p}."
    return builder(p, capitalize_first(p), tone, length).strip()
