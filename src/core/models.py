class Slot:
    """One side of a match: a participant, a bye, or an empty (TBD) position."""
    is_bye = False
    is_filled = False
    name = None

    def to_dict(self):
        return {'name': ''}


class Empty(Slot):
    def __repr__(self):
        return "Empty()"


class Bye(Slot):
    is_bye = True

    def to_dict(self):
        return {'name': '', 'bye': True}

    def __repr__(self):
        return "Bye()"


class Filled(Slot):
    is_filled = True

    def __init__(self, name):
        self.name = name

    def to_dict(self):
        return {'name': self.name}

    def __eq__(self, other):
        if not isinstance(other, Filled):
            return NotImplemented
        return other.name == self.name

    def __hash__(self):
        return hash(('Filled', self.name))

    def __repr__(self):
        return f"Filled(name={self.name})"


EMPTY = Empty()
BYE = Bye()


class Match:
    def __init__(self, id, top=EMPTY, bottom=EMPTY):
        self.id = id
        self.slots = [top, bottom]

    @property
    def names(self):
        """Participant names in this match, top to bottom."""
        return [slot.name for slot in self.slots if slot.is_filled]

    @property
    def bye_count(self):
        return sum(1 for slot in self.slots if slot.is_bye)

    def to_dict(self):
        return {'id': self.id, 'teams': [slot.to_dict() for slot in self.slots]}

    def __repr__(self):
        return f"Match(id={self.id}, slots={self.slots})"


class Round:
    def __init__(self, title, seeds=None):
        self.title = title
        self.seeds = seeds if seeds else []

    def to_dict(self):
        return {'title': self.title, 'seeds': [match.to_dict() for match in self.seeds]}

    def __repr__(self):
        return f"Round(title={self.title}, seeds={len(self.seeds)})"


def bracket_to_dict(bracket):
    """Serialize a bracket (list of rounds) into the renderer's JSON shape."""
    return [round_.to_dict() for round_ in bracket]
