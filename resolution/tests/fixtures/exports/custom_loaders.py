from resolution.loader import source_from_sdl


def default(path, options):
    return source_from_sdl("type Loaded { path: String }", location=path)
