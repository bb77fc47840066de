"""Simulate a round with random agents, printing every decision."""

import random

from unotable.agent.protocol import Action, PlayCard
from unotable.agents import RandomAgent
from unotable.orchestration import PlayerView, SimulationRunner


class ChattyAgent(RandomAgent):
    def get_action(self, view: PlayerView) -> Action:
        action = super().get_action(view)
        if isinstance(action, PlayCard):
            card = next(c for c in view.my_hand if c.id == action.card_id)
            extra = f" (chose {action.chosen_color.value})" if action.chosen_color else ""
            print(f"> {self.name} on {view.active_card} plays {card}{extra}, {len(view.my_hand) - 1} left")
        else:
            print(f"> {self.name} on {view.active_card} draws")
        return action


def main():
    rng = random.Random(42)
    agents = {pid: ChattyAgent(name=pid, rng=rng) for pid in ("p1", "p2", "p3", "p4")}

    runner = SimulationRunner(agents, seed=42)
    result = runner.run()

    print(f"Round finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    for place, player in enumerate(result.podium, start=1):
        print(f"  {place}. {player['name']} ({player['user_id']}): {player['hand_size']} cards left")


if __name__ == "__main__":
    main()
