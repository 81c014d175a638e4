def is_absolute(path: str) -> bool:
    if not path:
        return False

    # Strip "scheme://"
    scheme_end = path.find("://")
    if scheme_end != -1:
        path = path[scheme_end + 3:]
        if not path:
            return False

    # UNIX root "/" or Windows style "\"
    if path[0] in ("/", "\\"):
        return True

    # Windows drive: "C:", "C:/" or "C:\"
    if len(path) > 1 and path[0].isalpha() and path[1] == ":":
        if len(path) == 2:
            return True
        if path[2] in ("/", "\\"):
            return True

    return False
