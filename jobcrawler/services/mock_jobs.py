"""
Fixture jobs for exercising the API without crawling
"""
import logging
from typing import List

from jobcrawler.models.company_model import CompanyCharacteristics, CompanyProfile, TechStack
from jobcrawler.models.job_model import (
    Benefits,
    JobMetadata,
    JobRecord,
    Requirements,
    SalaryInfo,
    SalaryPeriod,
)
from jobcrawler.services.job_repository import JobRepository

logger = logging.getLogger(__name__)


def build_mock_jobs() -> List[JobRecord]:
    return [
        JobRecord(
            job_id="mock001",
            title="バックエンドエンジニア（AI × 動作解析）",
            description=(
                "【業務内容】\n"
                "・Webアプリケーションのサーバーサイド開発\n"
                "・API設計・開発\n"
                "・動作解析AIアルゴリズムの実装サポート\n\n"
                "【技術スタック】\n"
                "・Node.js, Python\n"
                "・React, Next.js\n"
                "・AWS, Docker\n"
                "・PostgreSQL, Redis\n\n"
                "【求める人材】\n"
                "・サーバーサイド開発経験3年以上\n"
                "・チーム開発経験\n\n"
                "【働き方】\n"
                "・リモートワーク可（週2-3日出社）\n"
                "・フレックスタイム制"
            ),
            location="東京都 / リモート",
            original_url="https://jp.indeed.com/viewjob?jk=mock001",
            company_name="株式会社Sportip",
            role_type="Infrastructure/DevOps",
            company=CompanyProfile(
                name="株式会社Sportip",
                industry="IT / AI",
                sub_industry="AI・機械学習",
                company_type="Startup",
                description="AI × 動作解析を活用したヘルスケアスタートアップ",
                technologies=TechStack(
                    backend=["Node.js", "Python", "PostgreSQL", "Redis"],
                    frontend=["React", "Next.js"],
                    infrastructure=["AWS", "Docker"],
                ),
                characteristics=CompanyCharacteristics(
                    size="~40名",
                    culture=["リモートワーク", "フレックスタイム", "スタートアップ文化"],
                    tech_stack=["Node.js", "Python", "React", "Next.js"],
                    work_style=["リモートワーク", "フレックスタイム"],
                ),
                location="東京都",
                website="https://sportip.co.jp",
            ),
            salary=SalaryInfo(
                min=8_000_000,
                max=12_000_000,
                period=SalaryPeriod.ANNUAL,
                display="年収800万円〜1,200万円",
                employment_type="正社員",
            ),
            requirements=Requirements(
                experience="3年以上",
                skills=["Node.js", "Python", "React", "AWS", "Docker", "PostgreSQL", "Redis"],
                languages=["日本語"],
            ),
            benefits=Benefits(
                work_style=["リモートワーク", "フレックスタイム"],
                welfare=["社会保険完備"],
                vacation=["完全週休2日制"],
                tags=["リモートワーク可", "フレックスタイム"],
            ),
            metadata=JobMetadata(
                employment_type="正社員",
                work_schedule="フレックスタイム",
                is_remote=True,
                tags=["リモートワーク可", "フレックスタイム"],
            ),
        ),
        JobRecord(
            job_id="mock002",
            title="フロントエンドエンジニア（React/Next.js）",
            description=(
                "【業務内容】\n"
                "・Webアプリケーションのフロントエンド開発\n"
                "・UI/UXの改善・最適化\n\n"
                "【技術スタック】\n"
                "・React, Next.js, TypeScript\n\n"
                "【求める人材】\n"
                "・React開発経験2年以上\n"
                "・TypeScript経験\n\n"
                "【働き方】\n"
                "・フルリモート可\n"
                "・副業OK"
            ),
            location="東京都 / フルリモート",
            original_url="https://jp.indeed.com/viewjob?jk=mock002",
            company_name="株式会社TechInnovate",
            role_type="Frontend",
            company=CompanyProfile(
                name="株式会社TechInnovate",
                industry="IT / インターネット",
                sub_industry="SaaS / クラウド",
                company_type="Startup",
                description="イノベーティブなWebサービスを開発するスタートアップ",
                technologies=TechStack(frontend=["React", "Next.js", "TypeScript"]),
                characteristics=CompanyCharacteristics(
                    size="~25名",
                    culture=["リモートワーク"],
                    tech_stack=["React", "Next.js", "TypeScript"],
                    work_style=["フルリモート", "副業可"],
                ),
                location="東京都",
                website="https://techinnovate.jp",
            ),
            salary=SalaryInfo(
                min=6_000_000,
                max=10_000_000,
                period=SalaryPeriod.ANNUAL,
                display="年収600万円〜1,000万円",
                employment_type="正社員",
            ),
            requirements=Requirements(
                experience="2年以上",
                skills=["React", "Next.js", "TypeScript"],
                languages=["日本語"],
            ),
            benefits=Benefits(
                work_style=["フルリモート", "副業可"],
                welfare=["社会保険完備"],
                development=["書籍購入補助"],
                tags=["リモートワーク可", "副業OK"],
            ),
            metadata=JobMetadata(
                employment_type="正社員",
                is_remote=True,
                tags=["リモートワーク可", "副業OK"],
            ),
        ),
        JobRecord(
            job_id="mock003",
            title="DevOpsエンジニア（AWS/Kubernetes）",
            description=(
                "【業務内容】\n"
                "・AWSインフラ設計・構築・運用\n"
                "・Kubernetesクラスター管理\n"
                "・CI/CDパイプライン構築・改善\n\n"
                "【求める人材】\n"
                "・AWS運用経験2年以上\n"
                "・Kubernetes経験\n\n"
                "【働き方】\n"
                "・リモートワーク中心（月1-2回出社）"
            ),
            location="東京都 / リモート",
            original_url="https://jp.indeed.com/viewjob?jk=mock003",
            company_name="株式会社InfraCloud",
            role_type="Infrastructure/DevOps",
            company=CompanyProfile(
                name="株式会社InfraCloud",
                industry="IT / インターネット",
                sub_industry="SaaS / クラウド",
                company_type="Mid-size",
                description="マルチクラウド対応のインフラストラクチャサービス",
                technologies=TechStack(
                    backend=["Go", "Python"],
                    infrastructure=["AWS", "GCP", "Kubernetes", "Docker", "Terraform", "CI/CD"],
                ),
                characteristics=CompanyCharacteristics(
                    size="~80名",
                    culture=["リモートワーク"],
                    tech_stack=["Go", "Python"],
                    work_style=["リモートワーク"],
                ),
                location="東京都",
                website="https://infracloud.jp",
            ),
            salary=SalaryInfo(
                min=7_500_000,
                max=14_000_000,
                period=SalaryPeriod.ANNUAL,
                display="年収750万円〜1,400万円",
                employment_type="正社員",
            ),
            requirements=Requirements(
                experience="2年以上",
                skills=["AWS", "Kubernetes", "Docker", "CI/CD"],
                languages=["日本語", "英語"],
                certifications=["AWS認定"],
            ),
            benefits=Benefits(
                work_style=["リモートワーク"],
                welfare=["社会保険完備"],
                development=["資格取得支援"],
                tags=["リモートワーク可"],
            ),
            metadata=JobMetadata(
                employment_type="正社員",
                is_remote=True,
                tags=["リモートワーク可"],
            ),
        ),
    ]


def load_mock_jobs(repository: JobRepository) -> int:
    """Store the fixture jobs; returns how many were newly created."""
    created = 0
    for record in build_mock_jobs():
        if repository.find_existing(record.job_id):
            continue
        repository.save(record)
        created += 1
    logger.info(f"Created {created} mock jobs")
    return created
