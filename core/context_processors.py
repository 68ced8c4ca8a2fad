from .context import build_shared_context


def shared(request):
    return {"shared": build_shared_context(getattr(request, "user", None))}
