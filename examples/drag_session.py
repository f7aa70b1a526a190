"""Example: drag a cause through the pointer API and settle its sub-causes."""

from causemap import MapSession, NodeId, PointerEvent, Viewport, format_layout


def main() -> None:
    # canvas shown at half size in a 1200x500 element offset by (20, 80)
    session = MapSession(viewport=Viewport(20.0, 80.0, 1200.0, 500.0))
    session.on_wheel(PointerEvent(620.0, 330.0), -150.0)
    print(f"Zoom after wheel: {session.view_state.zoom:.3f}")

    cause = NodeId.for_cause(0, 2)
    x, y = session.layout.position(cause)
    sx, sy = session.view.world_to_screen((x, y))
    # canvas units -> client units of the half-size element
    press = PointerEvent(20.0 + sx / 2.0, 80.0 + sy / 2.0)

    session.on_node_pointer_down(cause, press)
    session.on_pointer_move(PointerEvent(press.client_x + 60.0, press.client_y - 25.0))
    result = session.on_pointer_up(PointerEvent(press.client_x + 60.0, press.client_y - 25.0))

    print(f"Settled in {result.passes} pass(es), converged={result.converged}, max overlap={result.max_overlap:.3g}")
    print(format_layout(session.layout, session.view_state))


if __name__ == "__main__":
    main()
