"""Spaltenaufteilung überlappender Einheiten eines Tages.

Zwei Einheiten überlappen, wenn sich ihre Zeilenbereiche [start, end)
schneiden; bloßes Berühren zählt nicht. Einheiten werden in maximale
Überlappungs-Cluster zerlegt, innerhalb eines Clusters bekommt jede Einheit
eine eigene Spalte. Stunden stehen links.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnAssignment:
    unit_id: str
    column: int           # 0-basiert
    total_columns: int

    @property
    def width_percent(self) -> float:
        return 100.0 / self.total_columns

    @property
    def left_percent(self) -> float:
        return self.column * self.width_percent


def overlaps(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """Halboffene Zeilenbereiche (start, end) schneiden sich."""
    return a[0] < b[1] and a[1] > b[0]


def assign_columns(items: list[tuple[str, str, int, int]]) -> dict[str, ColumnAssignment]:
    """Spalten für (id, kind, start_row, end_row)-Tupel.

    Das Ergebnis hängt nicht von der Reihenfolge der Eingabe ab.
    Ein Ende vor oder auf dem Beginn wird auf eine Zeile angehoben.
    """
    rows = [(uid, kind, start, max(end, start + 1)) for uid, kind, start, end in items]
    rows.sort(key=lambda r: (r[2], r[3], r[0]))

    clusters: list[list[tuple[str, str, int, int]]] = []
    cluster_end = None
    for row in rows:
        if clusters and row[2] < cluster_end:
            clusters[-1].append(row)
            cluster_end = max(cluster_end, row[3])
        else:
            clusters.append([row])
            cluster_end = row[3]

    result: dict[str, ColumnAssignment] = {}
    for cluster in clusters:
        cluster.sort(key=lambda r: (r[1] != "lesson", r[2], r[3], r[0]))
        for index, (uid, _, _, _) in enumerate(cluster):
            result[uid] = ColumnAssignment(unit_id=uid, column=index, total_columns=len(cluster))
    return result
