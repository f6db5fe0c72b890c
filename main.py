import sys

from rich.pretty import pprint

from gvasm import COMMANDS, dispatch


def dry(descriptor):
    # Show what the collaborator would receive, then succeed
    pprint(descriptor, expand_all=True)


if __name__ == '__main__':
    sys.exit(dispatch(sys.argv[1:], collaborators=dict.fromkeys(COMMANDS, dry)))
