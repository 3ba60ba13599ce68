"""Full-screen garden view for the live timer."""

from rich.align import Align
from rich.console import Group
from rich.layout import Layout
from rich.text import Text

from pomodoro_plants.models.garden import BreakScene, GrowthStage
from pomodoro_plants.models.projection import BreakProjection, Projection, WorkProjection

PLANT_ART = {
    GrowthStage.DIRT: ["", "", "", "  ~~~~~  "],
    GrowthStage.WATERED: ["", "", "   ' '   ", "  ~~~~~  "],
    GrowthStage.CRACKING: ["", "", "    ,    ", "  ~~/~~  "],
    GrowthStage.SEEDLING: ["", "", "    .    ", "  ~~|~~  "],
    GrowthStage.SPROUT: ["", "", "   \\|/   ", "  ~~|~~  "],
    GrowthStage.BABY: ["", "   \\ /   ", "    |    ", "  ~~|~~  "],
    GrowthStage.GROWING: ["    |    ", "   \\|/   ", "    |    ", "  ~~|~~  "],
    GrowthStage.LEAFY: ["  \\ | /  ", "   \\|/   ", "  --|--  ", "  ~~|~~  "],
    GrowthStage.BUDDING: ["    o    ", "  \\ | /  ", "  --|--  ", "  ~~|~~  "],
    GrowthStage.FRUITING: ["  @ @ @  ", "  \\ | /  ", "  @-|-@  ", "  ~~|~~  "],
}

SCENE_ART = {
    BreakScene.HAY_BALE: ["   o     ", "  /|\\_## ", "  / \\### "],
    BreakScene.LEMONADE: ["   o  [] ", "  /|\\_|  ", "  / \\ |  "],
    BreakScene.FISHING: ["   o    /", "  /|\\__/ ", "~~~~~~~~ J"],
    BreakScene.TREE_NAP: ["  z ###  ", "   z ##  ", " o_/ ||  "],
}

_BAR_WIDTH = 40


def progress_bar(progress: float, width: int = _BAR_WIDTH) -> str:
    filled = int(width * progress)
    return "▓" * filled + "░" * (width - filled)


def display_mode(projection: Projection) -> str:
    """The coarse mode shown in the header: break, ready, running or idle."""
    if isinstance(projection, BreakProjection):
        return "break"
    if projection.can_harvest:
        return "ready"
    if projection.is_running:
        return "running"
    return "idle"


class GardenDisplay:
    """Builds the Rich layout for a projection."""

    def __init__(self):
        self.message: str | None = None
        self._message_mode: str | None = None

    def flash(self, message: str) -> None:
        """Show a notification in the footer.

        The message stays for as long as the garden remains in the mode it
        was first drawn in, and is dropped on the next mode change.
        """
        self.message = message
        self._message_mode = None

    def _expire_message(self, mode: str) -> None:
        if self.message is None:
            return
        if self._message_mode is None:
            self._message_mode = mode
        elif mode != self._message_mode:
            self.message = None
            self._message_mode = None

    def create_layout(self, projection: Projection) -> Layout:
        """Create the garden layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=4),
        )
        self._expire_message(display_mode(projection))

        if isinstance(projection, BreakProjection):
            title, style = "BREAK TIME", "garden.break"
            body = self._create_break_body(projection)
        else:
            title, style = self._work_title(projection)
            body = self._create_work_body(projection)

        header_text = Text(title, style=style, justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(Align.center(body, vertical="middle"))
        layout["footer"].update(
            Align.center(self._create_footer(projection), vertical="middle")
        )
        return layout

    def _work_title(self, projection: WorkProjection) -> tuple[str, str]:
        if projection.can_harvest:
            return "READY TO HARVEST", "garden.ready"
        if projection.is_running and not projection.is_focused:
            return "PAUSED - WINDOW UNFOCUSED", "garden.paused"
        if projection.is_running:
            return "Pomodoro Plants", "garden.timer"
        return "PAUSED", "garden.paused"

    def _create_work_body(self, projection: WorkProjection) -> Group:
        stage = GrowthStage(projection.stage)
        components = [Text(line, style="garden.plant", justify="center") for line in PLANT_ART[stage]]
        components.append(Text(stage.value, style="garden.hint", justify="center"))
        components.append(Text(""))

        paused = not projection.is_running or not projection.is_focused
        timer_style = "garden.paused" if paused else "garden.timer"
        components.append(
            Text(projection.time_remaining, style=timer_style, justify="center")
        )
        components.append(Text(""))

        bar = Text(justify="center")
        bar.append(progress_bar(projection.progress), style="garden.hint")
        bar.append(f"  {int(projection.progress * 100)}%", style="garden.hint")
        components.append(bar)

        scene = BreakScene(projection.next_break_scene)
        components.append(
            Text(
                f"Fruits today: {projection.fruits_collected}   "
                f"Next break: {scene.label}",
                style="garden.hint",
                justify="center",
            )
        )
        return Group(*components)

    def _create_break_body(self, projection: BreakProjection) -> Group:
        scene = BreakScene(projection.break_scene)
        components = [Text(line, style="garden.scene", justify="center") for line in SCENE_ART[scene]]
        components.append(Text(scene.label, style="garden.hint", justify="center"))
        components.append(Text(""))
        components.append(
            Text(projection.break_time_remaining, style="garden.break", justify="center")
        )
        components.append(Text(""))
        components.append(
            Text(
                f"Fruits today: {projection.fruits_collected}   "
                f"Sessions completed: {projection.completed_sessions}",
                style="garden.hint",
                justify="center",
            )
        )
        return Group(*components)

    def _create_footer(self, projection: Projection) -> Group:
        if isinstance(projection, BreakProjection):
            hints = "'b' skip break  •  'o' settings  •  'q' quit"
        elif projection.can_harvest:
            hints = "'h' harvest  •  'n' next scene  •  'q' quit"
        elif projection.is_running:
            hints = "'p' pause  •  'r' reset  •  'n' next scene  •  'q' quit"
        else:
            hints = "'s' start  •  'r' reset  •  'n' next scene  •  'o' settings  •  'q' quit"

        lines = [Text(hints, style="garden.hint", justify="center")]
        if self.message:
            lines.insert(0, Text(self.message, style="garden.ready", justify="center"))
        return Group(*lines)
