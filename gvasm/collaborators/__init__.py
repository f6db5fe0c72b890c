"""
Mount point for gvasm collaborators.

Distributions providing the real work of a command (init, make, run, dis,
itest) install a module here, e.g. gvasm/collaborators/make.py, that binds
itself on import:

    from gvasm import collaborator

    @collaborator("make")
    def make(args):
        ...

gvasm.main() imports every module below this package before dispatching.
"""
__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
