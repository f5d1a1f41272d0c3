'''
Hint generators give the point locator a vertex to start walking from.
'''


class LastUsedVertexHintGenerator(object):
    """Remembers the vertex that was involved in the most recent location
    or insertion, and hands that out as the next starting point.
    """
    __slots__ = ('last',)

    def __init__(self):
        self.last = 0

    def get_hint(self, position):
        return self.last

    def notify_vertex_lookup(self, v):
        self.last = v

    def notify_vertex_inserted(self, v, position):
        self.last = v

    def notify_vertex_removed(self, swapped_in_point, v, position):
        # vertices are never removed from the arena
        if self.last == v:
            self.last = 0


class FixedHintGenerator(object):
    """Always starts walking at the same vertex"""
    __slots__ = ('start',)

    def __init__(self, start=0):
        self.start = start

    def get_hint(self, position):
        return self.start

    def notify_vertex_lookup(self, v):
        pass

    def notify_vertex_inserted(self, v, position):
        pass

    def notify_vertex_removed(self, swapped_in_point, v, position):
        pass
