"""Turns a goal into an ordered plan of shell commands with the agent's help."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from itertools import groupby

from agentic.agent import Agent

log = logging.getLogger(__name__)

DEFAULT_PLAN_DURATION = 60

_PLANNING_PROMPT = """Create a detailed execution plan for the following goal: {goal}

Please break down the goal into specific, actionable steps that can be executed as CLI commands.
Each step should be:
1. Specific and measurable
2. Executable as a terminal command
3. Have clear dependencies on previous steps
4. Include expected outcomes

Format your response as a numbered list of steps with:
- Step number
- Command to execute
- Brief description
- Dependencies (if any)
- Expected outcome

Example format:
1. Command: `agentic task add --title "Setup environment" --priority high`
   Description: Create initial task for environment setup
   Dependencies: None
   Expected: Task created with ID

Focus on using the agentic CLI tool and standard terminal commands where appropriate."""

_COMMAND_LABEL = "Command:"
_DESCRIPTION_LABEL = "Description:"
_DEPENDENCIES_LABEL = "Dependencies:"


@dataclass
class ExecutionStep:
    """One command of a plan."""

    id: str
    command: str
    description: str
    dependencies: list[str] = field(default_factory=list)
    expected_output: str | None = None
    retry_count: int = 0


@dataclass
class ExecutionPlan:
    """Ordered steps towards a goal, with an estimated running time in seconds."""

    steps: list[ExecutionStep] = field(default_factory=list)
    context: dict[str, str] = field(default_factory=dict)
    estimated_duration: int = DEFAULT_PLAN_DURATION


def _dependency_order(a: ExecutionStep, b: ExecutionStep) -> int:
    if b.id in a.dependencies:
        return 1
    if a.id in b.dependencies:
        return -1
    return 0


def _step_duration(step: ExecutionStep) -> int:
    command = step.command
    if "install" in command or "download" in command:
        return 120
    if "test" in command or "build" in command:
        return 60
    return 10


def _extract_command(line: str) -> str | None:
    start = line.find(_COMMAND_LABEL)
    if start == -1:
        return None
    part = line[start + len(_COMMAND_LABEL):].strip()
    opening = part.find("`")
    if opening == -1:
        return None
    rest = part[opening + 1:]
    closing = rest.find("`")
    return rest if closing == -1 else rest[:closing]


class Planner:
    """Builds and refines execution plans for goals."""

    def __init__(self, agent: Agent) -> None:
        self.agent = agent

    def create_execution_plan(self, goal: str) -> ExecutionPlan:
        """Ask the agent for a plan towards ``goal`` and parse its answer."""
        log.info("Creating execution plan for goal: %s", goal)
        response = self.agent.process_query(self.planning_prompt(goal))
        plan = self.parse_plan_response(response, goal)
        log.debug("Created execution plan with %d steps", len(plan.steps))
        return plan

    def planning_prompt(self, goal: str) -> str:
        return _PLANNING_PROMPT.format(goal=goal)

    def parse_plan_response(self, response: str, goal: str) -> ExecutionPlan:
        """Read numbered steps from ``response``; fall back to echoing the goal."""
        steps: list[ExecutionStep] = []
        counter = 1
        command: str | None = None
        description: str | None = None
        dependencies: list[str] = []

        for raw_line in response.splitlines():
            line = raw_line.strip()
            if line.startswith(f"{counter}."):
                if command is not None and description is not None:
                    steps.append(
                        ExecutionStep(
                            id=f"step_{counter - 1}",
                            command=command,
                            description=description,
                            dependencies=list(dependencies),
                        )
                    )
                command = None
                description = None
                dependencies = []
                command = _extract_command(line)
                counter += 1
            elif line.startswith(_DESCRIPTION_LABEL):
                description = line[len(_DESCRIPTION_LABEL):].strip()
            elif line.startswith(_DEPENDENCIES_LABEL):
                deps = line[len(_DEPENDENCIES_LABEL):].strip()
                if deps != "None":
                    dependencies = [dep.strip() for dep in deps.split(",")]

        if command is not None and description is not None:
            steps.append(
                ExecutionStep(
                    id=f"step_{counter - 1}",
                    command=command,
                    description=description,
                    dependencies=dependencies,
                )
            )

        if not steps:
            steps.append(
                ExecutionStep(
                    id="step_1",
                    command=f"echo 'Goal: {goal}'",
                    description="Display the goal",
                    expected_output=f"Goal: {goal}",
                )
            )

        return ExecutionPlan(steps=steps, estimated_duration=DEFAULT_PLAN_DURATION)

    def optimize_plan(self, plan: ExecutionPlan) -> ExecutionPlan:
        """Return a copy without repeated commands, ordered by dependency, re-timed."""
        log.info("Optimizing execution plan with %d steps", len(plan.steps))
        optimized = copy.deepcopy(plan)
        optimized.steps = [
            next(group) for _, group in groupby(optimized.steps, key=lambda s: s.command)
        ]
        optimized.steps.sort(key=cmp_to_key(_dependency_order))
        optimized.estimated_duration = sum(_step_duration(s) for s in optimized.steps)
        log.debug("Optimized plan duration: %ss", optimized.estimated_duration)
        return optimized