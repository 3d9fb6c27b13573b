"""Post component: renders a blog post with its tags."""


def render(props):
    tags = "".join(f"<li>{tag}</li>" for tag in props.get("tags", []))
    return (
        f"<article class=\"post\"><h1>{props['title']}</h1>"
        f"<ul class=\"tags\">{tags}</ul>{props['contents']}</article>"
    )
