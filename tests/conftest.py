import os
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from cms_admin.main import app
from cms_admin.db.database import Base, get_session, SQLITE_TEST_DB
from cms_admin.core.security import get_password_hash
from cms_admin.models.comment import Comment, CommentStatus
from cms_admin.models.post import Post, PostStatus
from cms_admin.models.user import User

# 设置测试环境
os.environ["APP_ENV"] = "test"

# 测试数据库配置, unpooled
test_engine = create_async_engine(SQLITE_TEST_DB, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(bind=test_engine, autoflush=False, expire_on_commit=False)

@pytest.fixture(autouse=True)
async def clean_db():
    """清理并重建测试数据库"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

@pytest.fixture
async def session(clean_db):
    async with TestSessionLocal() as session:
        yield session

@pytest.fixture
async def client(clean_db):
    """创建测试客户端"""
    async def override_get_session():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

@pytest.fixture
def test_user_data():
    return {
        "username": "moderator",
        "email": "moderator@example.com",
        "password": "testpassword123",
        "bio": "Keeps the comments clean"
    }

@pytest.fixture
async def auth_headers(client, test_user_data):
    """Register and log in a moderator, return the bearer header"""
    await client.post("/api/users/register", json=test_user_data)
    response = await client.post("/api/users/login", json={
        "username": test_user_data["username"],
        "password": test_user_data["password"]
    })
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def session_factory():
    """Fresh sessions, for reading back what the code under test committed"""
    return TestSessionLocal

@pytest.fixture
async def author(session):
    """The user who wrote the seeded post and comments"""
    user = User(
        username="author",
        email="author@example.com",
        password_hash=get_password_hash("testpassword123")
    )
    session.add(user)
    await session.commit()
    return user

@pytest.fixture
async def post(session, author):
    """An active post owned by ``author``"""
    post = Post(
        user_id=author.id,
        title="Test Post",
        content="This is a test post content",
        status=PostStatus.ACTIVE
    )
    session.add(post)
    await session.commit()
    return post

@pytest.fixture
def make_comments(session, post, author):
    """Seed one comment per listed status, in order"""
    post_id, author_id = post.id, author.id

    async def _make(statuses):
        comments = [
            Comment(post_id=post_id, user_id=author_id, content=f"comment {i}", status=s)
            for i, s in enumerate(statuses)
        ]
        session.add_all(comments)
        await session.commit()
        return [c.id for c in comments]
    return _make

@pytest.fixture
def mixed_statuses():
    return [
        CommentStatus.PENDING,
        CommentStatus.APPROVED,
        CommentStatus.SPAM,
        CommentStatus.APPROVED,
        CommentStatus.TRASH,
        CommentStatus.PENDING,
        CommentStatus.APPROVED,
    ]
