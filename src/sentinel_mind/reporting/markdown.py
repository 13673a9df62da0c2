"""
Markdown Report Generator.

Renders defense analyses and practice-agent sessions as Markdown for
debriefs and session logs.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from sentinel_mind import __version__
from sentinel_mind.agents.schemas import AgentProfile, LearningProfile
from sentinel_mind.config import ThreatLevel
from sentinel_mind.defense.protocol import DefenseAnalysis

LEVEL_EMOJI = {
    ThreatLevel.CRITICAL: "🔴",
    ThreatLevel.HIGH: "🟠",
    ThreatLevel.MEDIUM: "🟡",
    ThreatLevel.LOW: "🔵",
    ThreatLevel.NONE: "🟢",
}


class MarkdownReporter:
    """Generates Markdown debrief reports."""

    def analysis_report(
        self,
        text: str,
        analysis: DefenseAnalysis,
        output_path: Path | None = None,
    ) -> str:
        """
        Generate a report for a single threat analysis.

        Returns:
            Complete Markdown report as a string.
        """
        sections = [
            self._header("Threat Analysis Report"),
            self._analysis_summary(text, analysis),
            self._detections(analysis),
            self._bullets("Counter-Measures", analysis.counter_measures),
            self._bullets("Recommendations", analysis.recommendations),
            self._footer(),
        ]
        return self._write([s for s in sections if s], output_path)

    def session_report(
        self,
        agent: AgentProfile,
        learning: LearningProfile | None = None,
        output_path: Path | None = None,
    ) -> str:
        """
        Generate a report for a practice-agent session.

        Returns:
            Complete Markdown report as a string.
        """
        sections = [
            self._header("Practice Session Report"),
            self._agent_summary(agent),
            self._history(agent),
            self._learning(agent, learning) if learning else "",
            self._footer(),
        ]
        return self._write([s for s in sections if s], output_path)

    def _write(self, sections: list[str], output_path: Path | None) -> str:
        report = "\n\n".join(sections)

        if output_path:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(report, encoding="utf-8")

        return report

    def _header(self, title: str) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        return (
            f"# 🛡️ {title}\n\n"
            f"**Date:** {timestamp}\n"
            f"**Tool:** SentinelMind v{__version__}\n\n"
            f"---"
        )

    def _analysis_summary(self, text: str, analysis: DefenseAnalysis) -> str:
        emoji = LEVEL_EMOJI.get(analysis.threat_level, "⚪")
        excerpt = text if len(text) <= 200 else text[:197] + "..."
        return (
            f"## Summary\n\n"
            f"> {excerpt or '(empty input)'}\n\n"
            f"| Metric | Value |\n"
            f"|--------|-------|\n"
            f"| **Threat Level** | {emoji} {analysis.threat_level.value.upper()} |\n"
            f"| **Primary Attack** | {analysis.attack_type or '-'} |\n"
            f"| **Defense Strategy** | {analysis.defense_strategy} |\n"
            f"| **Confidence** | {analysis.confidence}% |"
        )

    def _detections(self, analysis: DefenseAnalysis) -> str:
        if not analysis.detections:
            return "## Detections\n\n✅ No manipulation patterns detected."

        lines = [
            "## Detections\n",
            "| Category | Score | Keywords | Indicators |",
            "|----------|-------|----------|------------|",
        ]
        for threat in analysis.detections:
            lines.append(
                f"| {threat.category} | {threat.score} "
                f"| {', '.join(threat.matched_keywords) or '-'} "
                f"| {', '.join(threat.matched_indicators) or '-'} |"
            )
        return "\n".join(lines)

    def _bullets(self, title: str, items: list[str]) -> str:
        if not items:
            return ""
        return f"## {title}\n\n" + "\n".join(f"- {item}" for item in items)

    def _agent_summary(self, agent: AgentProfile) -> str:
        state = agent.state
        return (
            f"## Agent\n\n"
            f"| Property | Value |\n"
            f"|----------|-------|\n"
            f"| **ID** | `{agent.id}` |\n"
            f"| **Name** | {agent.name} |\n"
            f"| **Archetype** | {agent.archetype.value} |\n"
            f"| **Trance Depth** | {state.trance_depth:.1f} |\n"
            f"| **Resistance** | {state.resistance:.1f} |\n"
            f"| **Suggestibility** | {state.suggestibility:.1f} |\n"
            f"| **Awareness** | {state.awareness:.1f} |\n"
            f"| **Emotional State** | {state.emotional} |"
        )

    def _history(self, agent: AgentProfile) -> str:
        history = agent.state.history
        if not history:
            return "## Interactions\n\nNo techniques applied yet."

        lines = [
            "## Interactions\n",
            "| # | Technique | Effectiveness | Response |",
            "|---|-----------|---------------|----------|",
        ]
        for idx, record in enumerate(history, 1):
            lines.append(
                f"| {idx} | {record.technique} | {record.effectiveness:.1f} | {record.response} |"
            )
        return "\n".join(lines)

    def _learning(self, agent: AgentProfile, learning: LearningProfile) -> str:
        lines = [
            "## Adaptive Learning\n",
            f"**Interactions:** {learning.total_interactions}  ",
            f"**Adaptation Level:** {learning.adaptation_level}  ",
            f"**Learned Resistances:** "
            f"{', '.join(sorted(agent.resistance_patterns)) or 'none'}\n",
            "| Technique | Count | Mean Effectiveness |",
            "|-----------|-------|--------------------|",
        ]
        for technique, stats in learning.technique_effectiveness.items():
            lines.append(f"| {technique} | {stats.count} | {stats.mean_effectiveness:.1f} |")
        return "\n".join(lines)

    def _footer(self) -> str:
        return (
            "---\n\n"
            "*Generated by SentinelMind — rule-based cognitive defense.*\n\n"
            "⚠️ **Disclaimer:** Detection is heuristic keyword and pattern matching, "
            "not language understanding."
        )
