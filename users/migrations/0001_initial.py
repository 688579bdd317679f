from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
	]

	operations = [
		migrations.CreateModel(
			name='User',
			fields=[
				('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
				('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
				('updated_at', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
				('name', models.CharField(max_length=200, verbose_name='Nome')),
				('email', models.EmailField(max_length=254, unique=True, verbose_name='E-mail')),
				('username', models.CharField(max_length=150, unique=True, verbose_name='Usuário')),
				('password', models.CharField(max_length=255, verbose_name='Senha')),
				('level', models.CharField(choices=[('admin', 'Admin'), ('user', 'Usuário')], default='user', max_length=5, verbose_name='Nível')),
				('status', models.CharField(choices=[('on', 'Ativo'), ('off', 'Inativo')], default='on', max_length=3, verbose_name='Status')),
			],
			options={
				'verbose_name': 'Usuário',
				'verbose_name_plural': 'Usuários',
				'ordering': ('name',),
			},
		),
	]
