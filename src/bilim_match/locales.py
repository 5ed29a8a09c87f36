# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Localized vocabularies and text templates for the offline engine.

Every user-facing string the scorer, synthesizer and interview fallbacks
produce lives here, keyed by Language (and Tone where the wording varies).
There is no default locale: both tables must be complete.
"""

from itertools import product
from typing import Dict, List, NamedTuple, Tuple

from bilim_match.models import Language, Tone

RU = Language.RU
KK = Language.KK

# --- Field inference vocabularies ---

SKILL_VOCABULARY: Dict[Language, List[str]] = {
    RU: ['Коммуникация', 'Клиентский сервис', 'Организация процессов', 'Командная работа', 'Аналитика'],
    KK: ['Коммуникация', 'Клиенттік сервис', 'Ұйымдастыру', 'Командалық жұмыс', 'Аналитика'],
}

LANGUAGE_VOCABULARY: Dict[Language, List[str]] = {
    RU: ['Русский', 'Казахский', 'Английский'],
    KK: ['Қазақ', 'Орыс', 'Ағылшын'],
}

LANGUAGE_PLACEHOLDER: Dict[Language, str] = {
    RU: 'Русский, Казахский (рабочий уровень)',
    KK: 'Қазақ, Орыс (жұмыс деңгейі)',
}

TOOL_POOL: List[str] = ['Excel', 'Google Sheets', 'CRM', 'Notion', 'Trello', '1C', 'Canva', 'Figma']

DEFAULT_TOOLS: Dict[Language, List[str]] = {
    RU: ['Excel', 'Google Sheets', 'CRM'],
    KK: ['Excel', 'Google Sheets', 'CRM'],
}

SOFT_STRENGTHS: Dict[Language, List[str]] = {
    RU: ['Ответственность', 'Быстрое обучение', 'Ориентация на результат'],
    KK: ['Жауапкершілік', 'Жылдам үйрену', 'Нәтижеге бағытталу'],
}

EDUCATION_PLACEHOLDER: Dict[Language, str] = {
    RU: 'Имеется базовое профильное образование, дополнительно проходит практические курсы и самостоятельно повышает квалификацию.',
    KK: 'Негізгі білім бар, кәсіби бағыт бойынша тұрақты түрде өздігінен дамып, қысқа курстар арқылы біліктілігін арттырады.',
}

PROJECT_INVOLVEMENT: Dict[Language, str] = {
    RU: '{project}: участие в планировании, реализации и контроле результата.',
    KK: '{project}: жоспарлау, орындау және нәтижені бақылау бойынша тәжірибе.',
}

PROJECT_ANSWER_LABEL: Dict[Language, str] = {
    RU: 'Проектная практика: {answer}',
    KK: 'Жоба тәжірибесі: {answer}',
}

PROJECT_PLACEHOLDER: Dict[Language, str] = {
    RU: 'Участие в командных инициативах по улучшению внутренних рабочих процессов.',
    KK: 'Ішкі жұмыс процестерін жақсарту бойынша командалық бастамаларға қатысу.',
}

# --- Header defaults ---

DEFAULT_NAME: Dict[Language, str] = {RU: 'Кандидат', KK: 'Кандидат'}
DEFAULT_TITLE: Dict[Language, str] = {RU: 'Специалист', KK: 'Маман'}
DEFAULT_ROLE: Dict[Language, str] = {RU: 'специалист', KK: 'маман'}

# --- Narrative templates ---


class SummaryTemplate(NamedTuple):
    body: str           # {role}, {experience_clause}, {skills}
    with_experience: str  # {experience}
    without_experience: str


SUMMARY_TEMPLATES: Dict[Tuple[Language, Tone], SummaryTemplate] = {
    (RU, Tone.NEUTRAL): SummaryTemplate(
        '{role}, нацеленный на стабильный профессиональный рост. {experience_clause}, '
        'в работе использую {skills} и поддерживаю высокий стандарт качества.',
        'Имею {experience} опыта',
        'Имею практический опыт',
    ),
    (RU, Tone.POLITE): SummaryTemplate(
        '{role}, ориентированный на качественную и аккуратную работу. {experience_clause} '
        'применяю {skills}, поддерживаю эффективную коммуникацию и стабильное выполнение задач.',
        'В рамках {experience} опыта',
        'В профессиональной практике',
    ),
    (RU, Tone.BOLD): SummaryTemplate(
        '{role} с фокусом на результат и скорость выполнения задач. {experience_clause} '
        'уверенно применяю {skills}, выстраиваю процессы и довожу задачи до измеримого результата.',
        'За {experience} практики',
        'В работе',
    ),
    (KK, Tone.NEUTRAL): SummaryTemplate(
        '{role} ретінде кәсіби дамуға бағытталған маманмын. {experience_clause} '
        '{skills} дағдыларын күнделікті міндеттерде қолданып, сапалы нәтиже беруге тырысамын.',
        '{experience} тәжірибемде',
        'тәжірибемде',
    ),
    (KK, Tone.POLITE): SummaryTemplate(
        '{role} саласында ұқыпты әрі сенімді жұмыс атқарамын. {experience_clause} '
        '{skills} дағдыларын қолданып, әріптестермен тиімді байланыс пен тұрақты нәтиже қалыптастыруға мән беремін.',
        '{experience} тәжірибемде',
        'жұмыс тәжірибемде',
    ),
    (KK, Tone.BOLD): SummaryTemplate(
        '{role} бағыты бойынша нәтижеге жұмыс істейтін маманмын. {experience_clause} пайдаланып, '
        '{skills} арқылы процестерді жылдамдатып, команда нәтижесін күшейтуге фокус жасаймын.',
        '{experience} тәжірибемді',
        'тәжірибемді',
    ),
}


class ExperienceTemplate(NamedTuple):
    role_with_experience: str
    role_only: str
    experience_only: str
    no_signal: str
    daily_practice: str  # {skills}
    collaboration: str


EXPERIENCE_TEMPLATES: Dict[Language, ExperienceTemplate] = {
    RU: ExperienceTemplate(
        '{role}, {experience}.',
        '{role}.',
        '{experience} опыта в профессиональной среде.',
        'Опыт работы в профессиональной среде.',
        'В ежедневной работе применяю {skills}, поддерживаю порядок в процессах и соблюдение сроков.',
        'Регулярно взаимодействую с командой и клиентами, быстро адаптируюсь к новым задачам и инструментам.',
    ),
    KK: ExperienceTemplate(
        '{role}, {experience}.',
        '{role}.',
        '{experience} тәжірибесі бар маман.',
        'Кәсіби тәжірибесі бар маман.',
        'Күнделікті жұмыста {skills} дағдыларын қолданамын және процестердің орындалуын бақылап отырамын.',
        'Тапсырмаларды басымдыққа бөліп, командамен өзара үйлесімді әрекет етіп, сапалы нәтиже қамтамасыз етемін.',
    ),
}

_RU_STEADY_ACHIEVEMENTS = [
    'В роли «{role}» поддерживал(а) стабильную операционную работу и своевременное выполнение задач.',
    'Улучшил(а) порядок в документации и внутренних процессах взаимодействия команды.',
    'Сформировал(а) более качественную коммуникацию с коллегами и клиентами.',
]
_KK_STEADY_ACHIEVEMENTS = [
    '{role} рөлінде жұмыс ағынын құрылымдап, тапсырмалардың орындалуын тұрақтандырды.',
    'Ішкі құжат айналымын және есептілік тәртібін жақсартуға үлес қосты.',
    'Командамен бірлесе отырып, клиентке бағытталған сервистік сапаны нығайтты.',
]

# Polite shares the neutral set: achievements have two tiers, steady and bold.
ACHIEVEMENT_TEMPLATES: Dict[Tuple[Language, Tone], List[str]] = {
    (RU, Tone.NEUTRAL): _RU_STEADY_ACHIEVEMENTS,
    (RU, Tone.POLITE): _RU_STEADY_ACHIEVEMENTS,
    (RU, Tone.BOLD): [
        'В роли «{role}» систематизировал(а) рабочие процессы и ускорил(а) выполнение операционных задач.',
        'Повысил(а) стабильность качества сервиса за счёт структурирования входящих запросов и контроля сроков.',
        'Усилил(а) командное взаимодействие и предсказуемость результата по ежедневным задачам.',
    ],
    (KK, Tone.NEUTRAL): _KK_STEADY_ACHIEVEMENTS,
    (KK, Tone.POLITE): _KK_STEADY_ACHIEVEMENTS,
    (KK, Tone.BOLD): [
        '{role} ретінде күнделікті процестерді жүйелеп, тапсырмаларды орындау уақытын қысқартты.',
        'Клиент/әріптес сұраныстарын өңдеу сапасын тұрақты деңгейде ұстап, қайталама қателерді азайтты.',
        'Командалық коммуникацияны жақсартып, міндеттерді приоритизациялау арқылы нәтижені күшейтті.',
    ],
}

# --- Job tailoring ---

TAILORED_SUMMARY: Dict[Language, str] = {
    RU: '{summary} Целевая роль: {title} ({company}). Готов(а) усиливать бизнес-результат по направлениям: {focus}.',
    KK: '{summary} Мақсатты рөл: {title} ({company}). Вакансия талаптарына сәйкес {focus} бағытында құндылық беруге дайын.',
}

TAILORED_ACHIEVEMENT: Dict[Language, str] = {
    RU: 'Подтверждает релевантность целевой вакансии через практические кейсы по требованиям: {requirements}.',
    KK: 'Мақсатты вакансия талаптарына ({requirements}) сәйкес келетін практикалық үлгілермен жұмыс нәтижесін дәлелдей алады.',
}

# --- Match explanations ---

SKILL_MATCH_EXPLANATION: Dict[Language, str] = {
    RU: 'Совпадение по ключевым навыкам: {matched} из {total}.',
    KK: 'Негізгі дағдылар бойынша сәйкестік: {total} дағдының {matched}.',
}

GENERIC_MATCH_EXPLANATION: Dict[Language, str] = {
    RU: 'Базовая рекомендация на основе интересов и цели кандидата.',
    KK: 'Кандидаттың қызығушылықтары мен мақсатына негізделген базалық ұсыныс.',
}

# --- Prompt tone instructions (sent to the language model) ---

TONE_INSTRUCTIONS: Dict[Tuple[Language, Tone], str] = {
    (RU, Tone.NEUTRAL): 'Тон: нейтральный и профессиональный.',
    (RU, Tone.POLITE): 'Тон: очень вежливый, дипломатичный и уважительный.',
    (RU, Tone.BOLD): 'Тон: уверенный, энергичный и проактивный, но без агрессии.',
    (KK, Tone.NEUTRAL): 'Тон: бейтарап және кәсіби.',
    (KK, Tone.POLITE): 'Тон: өте сыпайы, дипломатиялық және құрметті.',
    (KK, Tone.BOLD): 'Тон: сенімді, жігерлі және бастамашыл, бірақ тым қатал емес.',
}

# --- Mock interview fallbacks ---

INTERVIEW_OPENING: Dict[Language, str] = {
    RU: 'Здравствуйте! Давайте начнём собеседование. Расскажите о себе и вашем опыте.',
    KK: 'Сәлеметсіз бе! Сұхбатты бастайық. Өзіңіз және тәжірибеңіз туралы айтып беріңіз.',
}

INTERVIEW_FOLLOW_UP: Dict[Language, str] = {
    RU: 'Хороший ответ! Давайте продолжим. Расскажите о вашем самом значимом проекте.',
    KK: 'Жақсы жауап! Жалғастырайық. Ең маңызды жобаңыз туралы айтып беріңіз.',
}

INTERVIEW_CLOSING: Dict[Language, str] = {
    RU: 'Спасибо за ваши ответы! Собеседование завершено, анализ скоро будет готов.',
    KK: 'Жауаптарыңызға рахмет! Сұхбат аяқталды, талдау жақында дайын болады.',
}

INTERVIEW_SPEAKERS: Dict[Language, Tuple[str, str]] = {
    RU: ('Кандидат', 'Интервьюер'),
    KK: ('Үміткер', 'Сұхбат алушы'),
}

FALLBACK_ANALYTICS: Dict[Language, Dict[str, object]] = {
    RU: {
        'anxiety_level': 'средний',
        'strengths': ['Хорошая структура ответов', 'Релевантный опыт'],
        'weaknesses': ['Можно добавить больше конкретных примеров'],
        'overall_feedback': 'Хорошее собеседование! Рекомендуем подготовить больше конкретных примеров из опыта.',
        'detailed_analysis': 'Для полного AI-анализа проверьте подключение к AI-сервису (BILIM_AI_BASE_URL).',
    },
    KK: {
        'anxiety_level': 'орташа',
        'strengths': ['Жауаптардың құрылымы жақсы', 'Тәжірибе лауазымға сәйкес'],
        'weaknesses': ['Тәжірибеден нақты мысалдарды көбірек келтіруге болады'],
        'overall_feedback': 'Жақсы сұхбат! Тәжірибеңізден нақты мысалдарды көбірек дайындауды ұсынамыз.',
        'detailed_analysis': 'Толық AI-талдау үшін AI қызметіне қосылымды тексеріңіз (BILIM_AI_BASE_URL).',
    },
}

# --- Document headings ---

SECTION_HEADINGS: Dict[Language, Dict[str, str]] = {
    RU: {
        'contacts': 'Контакты',
        'city': 'Город',
        'email': 'Email',
        'phone': 'Телефон',
        'summary': 'О себе',
        'skills': 'Навыки',
        'strengths': 'Сильные стороны',
        'achievements': 'Достижения',
        'tools': 'Инструменты',
        'experience': 'Опыт работы',
        'education': 'Образование',
        'languages': 'Языки',
        'projects': 'Проекты',
    },
    KK: {
        'contacts': 'Байланыс',
        'city': 'Қала',
        'email': 'Email',
        'phone': 'Телефон',
        'summary': 'Өзім туралы',
        'skills': 'Дағдылар',
        'strengths': 'Күшті жақтар',
        'achievements': 'Жетістіктер',
        'tools': 'Құралдар',
        'experience': 'Жұмыс тәжірибесі',
        'education': 'Білімі',
        'languages': 'Тілдер',
        'projects': 'Жобалар',
    },
}


def _require_complete(table: dict, keys, name: str):
    missing = [key for key in keys if key not in table]
    if missing:
        raise KeyError(f"Locale table {name} is missing entries: {missing}")


for _name, _table in (('SUMMARY_TEMPLATES', SUMMARY_TEMPLATES),
                      ('ACHIEVEMENT_TEMPLATES', ACHIEVEMENT_TEMPLATES),
                      ('TONE_INSTRUCTIONS', TONE_INSTRUCTIONS)):
    _require_complete(_table, list(product(Language, Tone)), _name)

for _name, _table in (('SKILL_VOCABULARY', SKILL_VOCABULARY),
                      ('LANGUAGE_VOCABULARY', LANGUAGE_VOCABULARY),
                      ('LANGUAGE_PLACEHOLDER', LANGUAGE_PLACEHOLDER),
                      ('DEFAULT_TOOLS', DEFAULT_TOOLS),
                      ('SOFT_STRENGTHS', SOFT_STRENGTHS),
                      ('EDUCATION_PLACEHOLDER', EDUCATION_PLACEHOLDER),
                      ('PROJECT_INVOLVEMENT', PROJECT_INVOLVEMENT),
                      ('PROJECT_ANSWER_LABEL', PROJECT_ANSWER_LABEL),
                      ('PROJECT_PLACEHOLDER', PROJECT_PLACEHOLDER),
                      ('DEFAULT_NAME', DEFAULT_NAME),
                      ('DEFAULT_TITLE', DEFAULT_TITLE),
                      ('DEFAULT_ROLE', DEFAULT_ROLE),
                      ('EXPERIENCE_TEMPLATES', EXPERIENCE_TEMPLATES),
                      ('TAILORED_SUMMARY', TAILORED_SUMMARY),
                      ('TAILORED_ACHIEVEMENT', TAILORED_ACHIEVEMENT),
                      ('SKILL_MATCH_EXPLANATION', SKILL_MATCH_EXPLANATION),
                      ('GENERIC_MATCH_EXPLANATION', GENERIC_MATCH_EXPLANATION),
                      ('INTERVIEW_OPENING', INTERVIEW_OPENING),
                      ('INTERVIEW_FOLLOW_UP', INTERVIEW_FOLLOW_UP),
                      ('INTERVIEW_CLOSING', INTERVIEW_CLOSING),
                      ('INTERVIEW_SPEAKERS', INTERVIEW_SPEAKERS),
                      ('FALLBACK_ANALYTICS', FALLBACK_ANALYTICS),
                      ('SECTION_HEADINGS', SECTION_HEADINGS)):
    _require_complete(_table, list(Language), _name)
