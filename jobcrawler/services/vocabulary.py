"""
Fixed keyword tables for the pattern classifiers.

Every table is an ordered list of (label, terms). Terms are written in
matching form (NFKC, lowercase). Plain-ASCII terms are matched on word
boundaries so that short abbreviations such as "ai", "go" or "sql" do not
fire inside "email", "google" or "mysql".
"""
from typing import List, Tuple

Vocabulary = List[Tuple[str, Tuple[str, ...]]]


def same(*labels: str) -> Vocabulary:
    """Table whose labels are also their own (lowercased) search terms."""
    return [(label, (label.lower(),)) for label in labels]


# ============================================================================
# INDUSTRY (first matching rule wins)
# ============================================================================

INDUSTRY_RULES: List[Tuple[Tuple[str, ...], Tuple[str, str]]] = [
    (("ai", "機械学習", "ml", "machine learning", "人工知能", "ディープラーニング", "deep learning", "llm", "生成ai"),
     ("IT / AI", "AI・機械学習")),
    (("saas", "クラウド"),
     ("IT / インターネット", "SaaS / クラウド")),
    (("スポーツ", "ヘルスケア", "健康", "healthcare", "医療"),
     ("IT / ヘルスケア", "健康・スポーツ関連サービス")),
]
DEFAULT_INDUSTRY = ("IT / インターネット", "Webサービス開発")


# ============================================================================
# COMPANY TYPE / SIZE
# ============================================================================

STARTUP_TERMS = ("startup", "スタートアップ", "ベンチャー")
LEGAL_ENTITY_MARKERS = ("株式会社", "合同会社", "(株)", "inc.", "co., ltd.")
INNOVATION_TERMS = ("新しい", "革新", "イノベーション", "innovative", "新規事業")
ENTERPRISE_TERMS = ("大手", "enterprise", "大企業", "上場企業", "東証プライム")

HEADCOUNT_LABELS = ("従業員数", "社員数", "従業員")


# ============================================================================
# TECH STACK (each term lives in exactly one bucket)
# ============================================================================

BACKEND_TECH: Vocabulary = [
    ("Node.js", ("node.js", "nodejs")),
    ("Python", ("python",)),
    ("Java", ("java",)),
    ("PHP", ("php",)),
    ("Ruby", ("ruby",)),
    ("Go", ("go", "golang", "go言語")),
    ("Rails", ("rails",)),
    ("C#", ("c#", "csharp")),
    ("Scala", ("scala",)),
    ("Kotlin", ("kotlin",)),
    ("Rust", ("rust",)),
    ("SQL", ("sql",)),
    ("MySQL", ("mysql",)),
    ("PostgreSQL", ("postgresql", "postgres")),
    ("MongoDB", ("mongodb",)),
    ("Redis", ("redis",)),
    ("DynamoDB", ("dynamodb",)),
    ("Spring", ("spring",)),
    ("Django", ("django",)),
    ("Flask", ("flask",)),
    ("FastAPI", ("fastapi",)),
    ("Express", ("express", "express.js")),
    ("Laravel", ("laravel",)),
]

FRONTEND_TECH: Vocabulary = [
    ("React", ("react", "react.js")),
    ("Vue.js", ("vue", "vue.js")),
    ("Angular", ("angular",)),
    ("Next.js", ("next.js", "nextjs")),
    ("Nuxt.js", ("nuxt", "nuxt.js")),
    ("TypeScript", ("typescript",)),
    ("JavaScript", ("javascript",)),
    ("Svelte", ("svelte",)),
]

INFRASTRUCTURE_TECH: Vocabulary = [
    ("AWS", ("aws",)),
    ("GCP", ("gcp", "google cloud")),
    ("Azure", ("azure",)),
    ("Docker", ("docker",)),
    ("Kubernetes", ("kubernetes", "k8s")),
    ("CI/CD", ("ci/cd",)),
    ("Terraform", ("terraform",)),
    ("Ansible", ("ansible",)),
    ("Jenkins", ("jenkins",)),
    ("GitHub Actions", ("github actions",)),
    ("CircleCI", ("circleci",)),
    ("Linux", ("linux",)),
]

OTHER_TECH: Vocabulary = [
    ("Git", ("git",)),
    ("GitHub", ("github",)),
    ("GitLab", ("gitlab",)),
    ("GraphQL", ("graphql",)),
    ("BigQuery", ("bigquery",)),
    ("Jira", ("jira",)),
    ("Figma", ("figma",)),
]


# ============================================================================
# CULTURE / ROLE
# ============================================================================

CULTURE_TAGS: Vocabulary = [
    ("リモートワーク", ("リモート", "remote", "在宅")),
    ("フレックスタイム", ("フレックス", "flexible")),
    ("自由な環境", ("自由", "自主性", "裁量")),
    ("スタートアップ文化", ("startup", "スタートアップ")),
    ("学習支援", ("学習", "研修", "勉強会")),
    ("アジャイル開発", ("アジャイル", "スクラム", "agile", "scrum")),
]

INFRA_ROLE_TERMS = ("インフラ", "devops", "sre", "infrastructure", "クラウドエンジニア", "基盤エンジニア", "プラットフォームエンジニア")
BACKEND_ROLE_TERMS = ("バックエンド", "backend", "サーバーサイド", "サーバサイド", "server-side", "api開発", "api設計")
FRONTEND_ROLE_TERMS = ("フロントエンド", "frontend", "front-end", "ui/ux", "マークアップ")

ROLE_INFRASTRUCTURE = "Infrastructure/DevOps"
ROLE_FULL_STACK = "Full-stack"
ROLE_BACKEND = "Backend"
ROLE_FRONTEND = "Frontend"
ROLE_GENERAL = "General IT"


# ============================================================================
# REQUIREMENTS
# ============================================================================

REQUIREMENT_HEADINGS = (
    "応募資格", "必須スキル", "必須条件", "必須要件", "求める人材", "求めるスキル", "応募条件", "対象となる方",
)
# Headings that close a requirements section; only matched at the start of a line
SECTION_END_HEADINGS = ("歓迎", "待遇", "福利厚生", "給与", "勤務地", "勤務時間", "休日", "選考")
HEADING_MARKS = "【■◆●□◇[<＜"

NO_EXPERIENCE_TERM = "未経験"
EXPERIENCED_TERM = "経験者"

SKILLS: Vocabulary = [
    ("Java", ("java",)),
    ("Python", ("python",)),
    ("JavaScript", ("javascript",)),
    ("TypeScript", ("typescript",)),
    ("Node.js", ("node.js", "nodejs")),
    ("React", ("react",)),
    ("Vue.js", ("vue.js", "vue")),
    ("Angular", ("angular",)),
    ("AWS", ("aws",)),
    ("GCP", ("gcp",)),
    ("Azure", ("azure",)),
    ("Docker", ("docker",)),
    ("Kubernetes", ("kubernetes",)),
    ("SQL", ("sql",)),
    ("MySQL", ("mysql",)),
    ("PostgreSQL", ("postgresql",)),
    ("MongoDB", ("mongodb",)),
    ("Redis", ("redis",)),
    ("Git", ("git",)),
    ("GitHub", ("github",)),
    ("GitLab", ("gitlab",)),
    ("Jenkins", ("jenkins",)),
    ("CI/CD", ("ci/cd",)),
    ("Linux", ("linux",)),
    ("Spring", ("spring",)),
    ("Django", ("django",)),
    ("Flask", ("flask",)),
    ("Express", ("express",)),
    ("Next.js", ("next.js",)),
    ("Nuxt.js", ("nuxt.js",)),
    ("HTML", ("html",)),
    ("CSS", ("css",)),
    ("Scala", ("scala",)),
    ("Go", ("go", "golang")),
    ("Rust", ("rust",)),
    ("PHP", ("php",)),
    ("Ruby", ("ruby",)),
    ("C#", ("c#",)),
    ("C++", ("c++",)),
    ("C言語", ("c言語",)),
    ("Swift", ("swift",)),
    ("Kotlin", ("kotlin",)),
]

LANGUAGES: Vocabulary = [
    ("日本語", ("日本語", "japanese")),
    ("英語", ("英語", "english", "toeic", "toefl")),
    ("中国語", ("中国語", "chinese")),
    ("韓国語", ("韓国語", "korean")),
]

# First match wins, so the more specific degree comes first
EDUCATION: Vocabulary = [
    ("大学院", ("大学院", "修士", "博士")),
    ("大学", ("大学", "大卒", "学士")),
    ("高専", ("高専",)),
    ("専門学校", ("専門学校", "専門卒")),
]

CERTIFICATIONS: Vocabulary = [
    ("AWS認定", ("aws認定", "aws certified")),
    ("基本情報技術者", ("基本情報技術者",)),
    ("応用情報技術者", ("応用情報技術者",)),
    ("情報処理安全確保支援士", ("情報処理安全確保支援士",)),
    ("PMP", ("pmp",)),
    ("CCNA", ("ccna",)),
    ("CISSP", ("cissp",)),
    ("CISA", ("cisa",)),
    ("Oracle認定", ("oracle認定", "oracle master")),
    ("LPIC", ("lpic",)),
]


# ============================================================================
# BENEFITS
# ============================================================================

WELFARE = same(
    "社会保険完備", "健康保険", "厚生年金", "雇用保険", "労災保険",
    "退職金制度", "企業年金", "財形貯蓄", "持株会", "団体保険",
)

WORK_STYLE: Vocabulary = [
    ("リモートワーク", ("リモートワーク",)),
    ("在宅勤務", ("在宅勤務",)),
    ("フレックスタイム", ("フレックスタイム",)),
    ("時短勤務", ("時短勤務",)),
    ("裁量労働制", ("裁量労働制",)),
    ("副業可", ("副業可", "副業ok")),
    ("服装自由", ("服装自由",)),
    ("フルリモート", ("フルリモート",)),
]

VACATION: Vocabulary = [
    ("完全週休2日制", ("完全週休2日制", "完全週休二日制")),
    ("土日祝休み", ("土日祝休み",)),
    ("年間休日120日以上", ("年間休日120日以上",)),
    ("有給休暇", ("有給休暇",)),
    ("夏季休暇", ("夏季休暇",)),
    ("年末年始休暇", ("年末年始休暇",)),
    ("慶弔休暇", ("慶弔休暇",)),
    ("特別休暇", ("特別休暇",)),
    ("育児休暇", ("育児休暇", "育児休業")),
    ("介護休暇", ("介護休暇", "介護休業")),
]

ALLOWANCES = same(
    "交通費支給", "住宅手当", "家族手当", "食事補助", "通勤手当",
    "資格手当", "役職手当", "地域手当", "残業手当",
)

DEVELOPMENT = same(
    "研修制度", "資格取得支援", "書籍購入補助", "セミナー参加費補助",
    "勉強会参加費補助", "技術書購入", "外部研修", "社内研修", "教育制度",
)


# ============================================================================
# LISTING METADATA
# ============================================================================

EMPLOYMENT_TYPES = ("正社員", "業務委託", "契約社員", "アルバイト", "パート", "派遣")

REMOTE_TERMS = ("リモート", "在宅", "フルリモート")
REMOTE_TAG = "リモートワーク可"
FLEX_TERMS = ("フレックス",)
FLEX_SCHEDULE = "フレックスタイム"

LISTING_TAGS = same(
    "転勤なし", "副業OK", "副業・WワークOK", "服装自由", "資格取得支援",
    "健康保険あり", "厚生年金あり", "雇用保険あり", "労災保険あり",
    "完全週休二日制", "土日祝休み", "年間休日120日以上", "交通費支給",
    "賞与あり", "昇給あり", "急募",
)

SPONSORED_TERMS = ("スポンサー", "sponsored", "職業紹介", "リクルートエージェント")
URGENT_TERMS = ("急募",)
RESPONDS_QUICKLY_TERMS = ("返信が早い", "返信率が高い", "通常1日以内に返信", "通常2日以内に返信", "通常3日以内に返信")
NEW_JOB_TERMS = ("新着",)


# ============================================================================
# SALARY
# ============================================================================

SALARY_KEYWORDS = ("円", "万", "給", "年収", "年俸", "報酬", "賃金")
