"""
Avertissements, transparence et contenu pédagogique accompagnant une fortune.

Le niveau d'avertissement dépend de la recommandation et du score d'investissement: plus la
suggestion est engageante, plus l'avertissement est fort.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from almanac.domain.entities import CamelModel, FortuneResult, Recommendation

ACKNOWLEDGMENT_VALIDITY = timedelta(days=7)
HIGH_SCORE = 80
MEDIUM_SCORE = 60
LOW_SCORE = 40


class DisclaimerLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


DISCLAIMER_TEMPLATES: dict[DisclaimerLevel, tuple[str, ...]] = {
    DisclaimerLevel.LOW: (
        "本系統提供的運勢分析僅供參考，不構成任何投資建議。",
        "市場存在波動風險，投資決策應基於個人財務狀況和專業建議。",
    ),
    DisclaimerLevel.MEDIUM: (
        "本系統運勢分析基於傳統農民曆理論，僅供娛樂參考使用。",
        "投資有風險，過往績效不保證未來表現，請謹慎評估。",
        "建議在做出投資決定前，諮詢專業理財顧問。",
    ),
    DisclaimerLevel.HIGH: (
        "⚠️ 重要提醒：本系統所有分析結果均不構成投資建議或買賣推薦。",
        "0050 ETF 價格波動可能導致本金損失，投資前請充分了解產品風險。",
        "運勢分析僅為傳統文化元素，與實際投資表現無直接關聯。",
        "請勿根據本系統分析做出重大財務決策，應基於個人風險承受能力。",
    ),
    DisclaimerLevel.CRITICAL: (
        "🚨 重要免責聲明：本系統提供之所有內容，包括但不限於運勢分析、投資建議等，均不構成任何形式的投資建議。",
        "投資涉及風險，本金可能遭受損失。0050 ETF 價格受多種因素影響，歷史表現不保證未來結果。",
        "本系統採用傳統農民曆、生肖、五行等文化元素進行分析，這些方法缺乏科學驗證，僅供文化娛樂參考。",
        "使用者應充分了解自身財務狀況、投資目標和風險承受能力，並在必要時尋求獨立專業意見。",
        "本系統開發團隊不對因使用本系統資訊所造成的任何直接或間接損失承擔責任。",
        "如無法理解或同意本免責聲明，請立即停止使用本系統。",
    ),
}

HIGH_SCORE_NOTE = "高運勢分數僅代表演算法計算結果，不保證實際投資表現。"
LOW_SCORE_NOTE = "低運勢分數不應作為避開投資機會的唯一依據。"

ALGORITHM_EXPLANATION = """運勢計算演算法結合以下元素：
1. **農民曆分析**：根據指定日期的天干地支計算五行能量
2. **個人八字**：結合使用者出生年月日時分析個人特質
3. **生肖相性**：根據生肖屬性計算吉利時段
4. **五行平衡**：計算金木水火土五行的平衡度
5. **加權評分**：綜合各項因素計算總體運勢和投資分數

計算公式：
總體運勢 = (五行平衡度 + 平均值分數) × 0.5
投資運勢 = 總體運勢 + 生肖加成 + 隨機波動

注意：此演算法僅供文化娛樂參考，不具備科學預測能力。"""

DATA_SOURCES = (
    "FinMind API - 台灣金融數據開源平台",
    "lunar_python - 農民曆計算函式庫",
    "傳統八字五行理論",
    "生肖運勢對照表",
)

LIMITATIONS = (
    "運勢計算基於傳統文化，缺乏科學驗證",
    "市場受多種因素影響，歷史表現不保證未來結果",
    "個人運勢分析不考慮實際財務狀況",
    "僅適用於台股 0050 ETF，不建議用於其他投資標的",
)


class Disclaimer(CamelModel):
    level: DisclaimerLevel
    messages: tuple[str, ...]
    requires_acknowledgment: bool


class Transparency(CamelModel):
    algorithm_explanation: str
    data_sources: tuple[str, ...]
    limitations: tuple[str, ...]
    confidence_level: float
    last_updated: str


class EducationalContent(CamelModel):
    category: str
    title: str
    content: str
    difficulty: str
    related_topics: tuple[str, ...] = ()


class EnhancedFortune(FortuneResult):
    """`FortuneResult` enrichi de l'avertissement, de la transparence et du contenu pédagogique."""

    disclaimer: Disclaimer
    transparency: Transparency
    educational_content: tuple[EducationalContent, ...]


def disclaimer_level(investment_score: float, recommendation: Recommendation) -> DisclaimerLevel:
    """Achat: critique (>= 80) ou élevé; vente: moyen; conservation: moyen (>= 60) ou faible."""
    if recommendation is Recommendation.BUY:
        return DisclaimerLevel.CRITICAL if investment_score >= HIGH_SCORE else DisclaimerLevel.HIGH
    if recommendation is Recommendation.SELL:
        return DisclaimerLevel.MEDIUM
    return DisclaimerLevel.MEDIUM if investment_score >= MEDIUM_SCORE else DisclaimerLevel.LOW


def create_disclaimer(investment_score: float, recommendation: Recommendation) -> Disclaimer:
    level = disclaimer_level(investment_score, recommendation)
    messages = list(DISCLAIMER_TEMPLATES[level])
    if investment_score >= HIGH_SCORE:
        messages.append(HIGH_SCORE_NOTE)
    if investment_score <= LOW_SCORE:
        messages.append(LOW_SCORE_NOTE)
    return Disclaimer(
        level=level,
        messages=tuple(messages),
        requires_acknowledgment=level in (DisclaimerLevel.HIGH, DisclaimerLevel.CRITICAL),
    )


def should_force_display(
    disclaimer: Disclaimer, last_acknowledgment: datetime | None, now: datetime | None = None
) -> bool:
    """Vrai si l'avertissement exige une confirmation absente ou vieille de plus de 7 jours."""
    if not disclaimer.requires_acknowledgment:
        return False
    if last_acknowledgment is None:
        return True
    now = now or datetime.now(last_acknowledgment.tzinfo)
    return now - last_acknowledgment > ACKNOWLEDGMENT_VALIDITY


def build_transparency(fortune: FortuneResult, now: datetime | None = None) -> Transparency:
    return Transparency(
        algorithm_explanation=ALGORITHM_EXPLANATION,
        data_sources=DATA_SOURCES,
        limitations=LIMITATIONS,
        confidence_level=min(95.0, 60 + fortune.overall_score * 0.3),
        last_updated=(now or datetime.now()).isoformat(),
    )


def educational_content(fortune: FortuneResult) -> tuple[EducationalContent, ...]:
    """Fiches pédagogiques: lecture du jour, bases de l'ETF 0050, et stratégie de repli si le
    score d'investissement est faible."""
    e = fortune.elements
    content = [
        EducationalContent(
            category="lunar-calendar",
            title="今日農民曆解讀",
            content=(
                f"今天是 {fortune.date}，根據農民曆，五行能量分別為：\n"
                f"金: {e.metal} | 木: {e.wood} | 水: {e.water} | 火: {e.fire} | 土: {e.earth}\n\n"
                "五行平衡度影響整體運勢，當各元素數值接近時，代表運勢較為穩定。"
            ),
            difficulty="beginner",
            related_topics=("五行理論", "農民曆基礎"),
        ),
        EducationalContent(
            category="investment",
            title="0050 ETF 基礎認識",
            content=(
                "元大台灣50ETF(0050)追蹤台灣50指數，包含台灣市值最大的50家公司。"
                "是台灣最主流的ETF之一，適合長期投資和定期定額。"
            ),
            difficulty="beginner",
            related_topics=("ETF基礎", "台灣股市"),
        ),
    ]
    if fortune.investment_score <= LOW_SCORE:
        content.append(
            EducationalContent(
                category="risk-management",
                title="低運勢日投資策略",
                content=(
                    "運勢較低時建議：1. 避免重大投資決策 2. 專注研究分析 3. 保持現金部位 "
                    "4. 回顧投資策略。記住，市場機會隨時存在，不急於一時。"
                ),
                difficulty="intermediate",
                related_topics=("風險控制", "情緒管理"),
            )
        )
    return tuple(content)


def enhance(fortune: FortuneResult, now: datetime | None = None) -> EnhancedFortune:
    """Enrichit un résultat de fortune (sans le modifier)."""
    return EnhancedFortune(
        **fortune.model_dump(),
        disclaimer=create_disclaimer(fortune.investment_score, fortune.recommendation),
        transparency=build_transparency(fortune, now),
        educational_content=educational_content(fortune),
    )
