"""
Basic LRCKit usage example.

Demonstrates parsing LRC text and following the active caption line while
position samples arrive, including a backward seek.
"""

from lrckit import CaptionTimeline, NO_ACTIVE_INDEX

LRC = """[ti:Example Song]
[ar:Example Artist]
[00:00.00]
[00:04.20]First line
[00:09.80]Second line
[00:09.80]Harmony on the same beat
[00:15.00]Third line
"""


def main():
    timeline = CaptionTimeline.from_text(LRC)
    print(f"Parsed {len(timeline)} caption lines")

    def on_change(index):
        if index == NO_ACTIVE_INDEX:
            print("  (no active line)")
        else:
            print(f"  -> [{index}] {timeline.entries[index].text!r}")

    timeline.subscribe(on_change)

    # Positions as a 100ms player timer might report them, with a seek back at the end
    for position in (0.0, 0.1, 4.2, 5.0, 9.8, 12.3, 16.0, 3.0):
        print(f"t={position:5.1f}s")
        timeline.update(position)


if __name__ == "__main__":
    main()
