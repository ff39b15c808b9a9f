"""Characters: talk when bumped, trade a payment for the items they want."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Union

from adventure.entities.base import ActiveEntity
from adventure.entities.pickable import Pickable
from adventure.logging import get_logger

if TYPE_CHECKING:
    from adventure.room import Room

log = get_logger('character')


class CharacterState(Enum):
    """Quest state. SOLVED is terminal."""

    UNSOLVED = "unsolved"
    SOLVED = "solved"


@dataclass
class Behaviour:
    """What a character says and wants.

    In every text, '%1' becomes the list of items still wanted and '%2'
    the payment item's name. In thankyou_text '%1' is always empty since
    nothing is wanted any more.

    Attributes:
        desired_items: Item ids the character wants, in order
        unsolved_text: Said on bump while items are still wanted
        solved_text: Said on bump once everything was brought
        thankyou_text: Said when the last wanted item is handed over
        bringmore_text: Said when a wanted item is handed over but more remain
        notneeded_text: Said when offered something not wanted
        payment_item: Item given to the player once solved
        on_solve: Called with the last item id, after payment
        on_bringmore: Called with the item id after a partial delivery
    """

    desired_items: Union[int, List[int]] = field(default_factory=list)
    unsolved_text: Optional[str] = None
    solved_text: Optional[str] = None
    thankyou_text: Optional[str] = None
    bringmore_text: Optional[str] = None
    notneeded_text: Optional[str] = None
    payment_item: Optional[int] = None
    on_solve: Optional[Callable[[int], None]] = None
    on_bringmore: Optional[Callable[[int], None]] = None

    def __post_init__(self):
        if isinstance(self.desired_items, int):
            self.desired_items = [self.desired_items]
        self.desired_items = list(dict.fromkeys(self.desired_items))


class Character(ActiveEntity):
    """An NPC with a fetch quest."""

    def __init__(self, room: 'Room', char_id: int, cx: int, cy: int, behaviour: Behaviour):
        """Initialize character.

        Args:
            room: Room to place the character in
            char_id: Item id whose tile and name represent the character
            cx: Grid column
            cy: Grid row
            behaviour: Texts, wanted items and payment
        """
        super().__init__(room, cx, cy, item_id=char_id)
        self.behaviour = behaviour
        self.state = CharacterState.UNSOLVED

    @property
    def solved(self) -> bool:
        return self.state == CharacterState.SOLVED

    def subst_names(self, text: str) -> str:
        """Fill '%1' (wanted items) and '%2' (payment) into `text`."""
        content = self.ctx.content
        desired = self.behaviour.desired_items
        desired_text = ""
        if desired:
            desired_text = content.item_name(desired[0])
            for i in range(1, len(desired)):
                desired_text += " and " if i == len(desired) - 1 else ", "
                # every name after the first repeats entry 1, as shipped
                desired_text += content.item_name(desired[1])

        payment = self.behaviour.payment_item
        payment_text = content.item_name(payment) if payment is not None else ""
        return text.replace("%1", desired_text).replace("%2", payment_text)

    def _say(self, text: Optional[str], on_complete: Optional[Callable[[], None]] = None) -> None:
        if not text:
            if on_complete:
                on_complete()
            return
        self.ctx.dialogue.show_speech(self, self.subst_names(text), on_complete)

    def on_bump(self) -> None:
        if self.state == CharacterState.UNSOLVED:
            self._say(self.behaviour.unsolved_text)
        else:
            self._say(self.behaviour.solved_text)

    def try_give(self, item_id: int) -> bool:
        """Take `item_id` off the wanted list if it is there."""
        try:
            self.behaviour.desired_items.remove(item_id)
        except ValueError:
            return False
        return True

    def on_item(self, item_id: int) -> bool:
        if not self.try_give(item_id):
            if self.behaviour.notneeded_text:
                self.ctx.dialogue.show_speech(self, self.behaviour.notneeded_text)
            return False

        if not self.behaviour.desired_items:
            self.state = CharacterState.SOLVED
            if self.room is not None and self.room.quest is not None:
                self.room.quest.solved = True
            log.event('quest_solved', character=self.item_id, item=item_id)
            self._say(self.behaviour.thankyou_text, lambda: self._pay(item_id))
        else:
            on_bringmore = self.behaviour.on_bringmore
            self._say(
                self.behaviour.bringmore_text,
                (lambda: on_bringmore(item_id)) if on_bringmore else None,
            )
        return True

    def _pay(self, item_id: int) -> None:
        """Hand over the payment once the thank-you is dismissed."""
        payment = self.behaviour.payment_item
        if payment is not None and self.room is not None:
            obj = Pickable(self.room, payment, self.cx, self.cy)
            obj.enter_room().bring_to_front()
            obj.on_bump()
        if self.behaviour.on_solve:
            self.behaviour.on_solve(item_id)
