#!/usr/bin/env python3
"""
Headless Room Simulator

Builds a two-room demo (an outpost with a fetch quest and a cave with
monsters), optionally plays the quest walkthrough, then runs the frame
loop and prints a summary. No window, no devices.

Usage:
    # Idle simulation of the outpost
    python -m adventure --frames 200

    # Play the quest, then let the cave monsters have a go
    python -m adventure --walkthrough --frames 300 --seed 7

    # Custom content table and difficulty
    python -m adventure --content my_content.yaml --difficulty hard

    # Write encounter events (JSONL) to the log directory
    ADVENTURE_LOGGING_ENCOUNTERS_ENABLED=true python -m adventure -w
"""

import argparse
import sys
from typing import Dict, List, Optional

from adventure.collaborators import Action
from adventure.config import GRID_HEIGHT, GRID_WIDTH, TAKE_DELAY, get_difficulty_names
from adventure.content import Content, ContentError, load_content
from adventure.context import GameContext
from adventure.entities import (
    Behaviour,
    Character,
    Container,
    Door,
    HidingMovableEntity,
    ShootingMonster,
    WanderingMonster,
)
from adventure.headless import HeadlessRenderer, MapWorld, QueuedDialogue, ScriptedInput, SimplePlayer
from adventure.logging import (
    ENCOUNTERS,
    close_all_sinks,
    configure_logging,
    create_sink,
    get_logger,
    register_sink,
)
from adventure.room import Quest, Room

log = get_logger('simulator')

WATER_FLASK = 21
POWER_CELL = 22
RED_KEY_CARD = 27
FARMER = 90
ROCK_TILE = 7


def build_demo(ctx: GameContext) -> Dict[str, object]:
    """Create the outpost and cave rooms and their inhabitants."""
    content = ctx.content
    world = MapWorld()
    ctx.world = world

    outpost = Room(ctx, GRID_WIDTH, GRID_HEIGHT, quest=Quest("moisture"), name="outpost")
    cave = Room(ctx, GRID_WIDTH, GRID_HEIGHT, name="cave")
    world.add_room(0, 0, outpost)
    world.add_room(1, 0, cave)

    farmer = Character(outpost, FARMER, 4, 3, Behaviour(
        desired_items=[WATER_FLASK, POWER_CELL],
        unsolved_text="Bring me %1 and I'll give you %2.",
        bringmore_text="Thanks! Now I need %1.",
        thankyou_text="That's everything. Take %2.",
        solved_text="The vaporators are humming again.",
        notneeded_text="I have no use for that.",
        payment_item=RED_KEY_CARD,
    ))
    crate = Container(outpost, content.container_set('crate'), 6, 3, stored_item=WATER_FLASK)
    rock = HidingMovableEntity(outpost, ROCK_TILE, 5, 4, hidden_item=POWER_CELL)
    door = Door(outpost, content.door_set('blast_door'), 5, 2,
                teleport_target=(1, 0), required_key=RED_KEY_CARD, inroom_coords=(1, 1))

    WanderingMonster(cave, content.monster_set('tusken'), 10, 10,
                     walk_delay=10, hp=3, hit=1, loot=POWER_CELL, loot_chance=0.6)
    ShootingMonster(cave, content.monster_set('scouttrooper'), 1, 8,
                    walk_delay=10, hp=2, hit=1, loot=WATER_FLASK)

    return {
        'world': world, 'outpost': outpost, 'cave': cave,
        'farmer': farmer, 'crate': crate, 'rock': rock, 'door': door,
    }


def take_offered_item(ctx: GameContext, player: SimplePlayer, max_frames: int = TAKE_DELAY + 4) -> bool:
    """Hold the pickup action until the offered item is taken."""
    ctx.input.press(Action.PICKUP)
    try:
        for _ in range(max_frames):
            if player.pickup_target is None:
                break
            ctx.tick()
    finally:
        ctx.input.release(Action.PICKUP)
    if player.pickup_target is not None:
        log.warning("%r still offered after %d frames", player.pickup_target, max_frames)
        return False
    return True


def walkthrough(ctx: GameContext, player: SimplePlayer, demo: Dict[str, object]) -> List[str]:
    """Solve the outpost quest and walk through the blast door."""
    steps = []

    player.step(1, 0)                    # bump the crate
    take_offered_item(ctx, player)
    steps.append("opened crate")

    demo['rock'].on_move(5, 5)           # push the rock away
    player.step(0, 1)                    # bump the revealed item
    take_offered_item(ctx, player)
    steps.append("found item under rock")

    player.give(WATER_FLASK, -1, 0)
    player.give(POWER_CELL, -1, 0)
    ctx.dialogue.dismiss_all()           # payment appears once dismissed
    take_offered_item(ctx, player)
    steps.append("solved quest")

    player.give(RED_KEY_CARD, 0, -1)
    player.step(0, -1)                   # teleport through the door
    steps.append(f"teleported to {ctx.current_room.name}")
    return steps


def run(args: argparse.Namespace, content: Content) -> None:
    """Build the demo, play it and print a summary."""
    dialogue = QueuedDialogue(auto_dismiss=not args.walkthrough)
    ctx = GameContext(HeadlessRenderer(), ScriptedInput(), dialogue,
                      content=content, seed=args.seed, difficulty=args.difficulty)
    demo = build_demo(ctx)

    player = SimplePlayer(ctx, 5, 3)
    ctx.player = player
    demo['outpost'].enter()
    player.spawn()

    if args.walkthrough:
        for step in walkthrough(ctx, player, demo):
            print(f"  - {step}")

    for _ in range(args.frames):
        ctx.tick()
        if player.hp <= 0:
            break

    room = ctx.current_room
    monsters = [obj for obj in room.objects if isinstance(obj, WanderingMonster)] if room else []
    print(f"Frames simulated: {ctx.frame}")
    print(f"Current room: {room.name if room else '-'}")
    print(f"Player: cell=({player.cx}, {player.cy}) hp={player.hp}")
    print(f"Inventory: {[content.item_name(i) for i in player.inventory]}")
    print(f"Quest solved: {demo['outpost'].quest.solved}")
    print(f"Monsters left: {len(monsters)}")
    print(f"Effects played: {len(ctx.renderer.effects)}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the headless simulator."""
    parser = argparse.ArgumentParser(
        description='Headless room simulator for the encounter layer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--frames', '-n', type=int, default=200,
                        help='Frames to simulate (default: 200)')
    parser.add_argument('--seed', '-s', type=int, default=None,
                        help='Random seed for monster AI')
    parser.add_argument('--difficulty', '-d', type=str, default='normal',
                        choices=get_difficulty_names(),
                        help='Ranged combat tuning')
    parser.add_argument('--content', '-c', type=str, default=None,
                        help='Content table YAML (default: bundled)')
    parser.add_argument('--walkthrough', '-w', action='store_true',
                        help='Play the outpost quest before simulating')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        help='Default log level')
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level)

    try:
        content = load_content(args.content)
    except ContentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    register_sink(ENCOUNTERS, create_sink(ENCOUNTERS))
    try:
        run(args, content)
    finally:
        close_all_sinks()
    return 0


if __name__ == '__main__':
    sys.exit(main())
